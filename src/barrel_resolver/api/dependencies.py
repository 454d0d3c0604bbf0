"""FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends

from barrel_resolver.config import Settings, get_settings
from barrel_resolver.core import LoaderOptions


def get_default_options(settings: Annotated[Settings, Depends(get_settings)]) -> LoaderOptions:
    """Dependency for the server-wide stage defaults."""
    return settings.loader_options()


# Type aliases for injected dependencies
AppSettings = Annotated[Settings, Depends(get_settings)]
DefaultOptions = Annotated[LoaderOptions, Depends(get_default_options)]
