"""Duplicate removal for export entries."""

from collections.abc import Iterable

from barrel_resolver.core import ExportEntry


def remove_duplicates(entries: Iterable[ExportEntry]) -> list[ExportEntry]:
    """
    Keep the first entry of each identity, preserving order.

    Identity is (exported name, source, kind, type-only), so a value
    export and a type export of the same name are both kept.
    """
    seen: set[tuple] = set()
    deduped: list[ExportEntry] = []
    for entry in entries:
        if entry.identity in seen:
            continue
        seen.add(entry.identity)
        deduped.append(entry)
    return deduped
