"""Deterministic ordering of export entries."""

from collections.abc import Iterable

from barrel_resolver.core import ExportEntry


def sort_exports(entries: Iterable[ExportEntry]) -> list[ExportEntry]:
    """Sort by source, then exported name. The sort is stable."""
    return sorted(entries, key=lambda e: (e.source, e.exported_name))
