"""Core domain layer - pure Python business logic."""

from barrel_resolver.core.exceptions import SourceReadError
from barrel_resolver.core.models import (
    DEFAULT_SPECIFIER,
    NAMESPACE_SPECIFIER,
    DeclarationScan,
    DeclaredExport,
    ExportEntry,
    ExportKind,
    LoaderOptions,
    ResolutionContext,
)

__all__ = [
    "DEFAULT_SPECIFIER",
    "NAMESPACE_SPECIFIER",
    "DeclarationScan",
    "DeclaredExport",
    "ExportEntry",
    "ExportKind",
    "LoaderOptions",
    "ResolutionContext",
    "SourceReadError",
]
