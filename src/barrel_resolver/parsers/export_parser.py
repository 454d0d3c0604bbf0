"""Line-based parser for re-export statements."""

import re
from collections.abc import Iterable

from barrel_resolver.core import DEFAULT_SPECIFIER, NAMESPACE_SPECIFIER, ExportEntry, ExportKind

# export { a, b as c } from "src"  /  export type { A } from "src"
_NAMED_RE = re.compile(
    r"""^export\s+(?P<type>type\s*)?\{(?P<items>[^}]*)\}\s*from\s*"""
    r"""(?P<quote>['"])(?P<source>[^'"]+)(?P=quote)"""
)

# export * from "src"  /  export * as ns from "src"  /  export type * from "src"
_NAMESPACE_RE = re.compile(
    r"""^export\s+(?P<type>type\s*)?\*\s*(?:as\s+(?P<alias>[\w$]+)\s*)?from\s*"""
    r"""(?P<quote>['"])(?P<source>[^'"]+)(?P=quote)"""
)

# a  /  a as b  /  type A  /  default as X
_ITEM_RE = re.compile(
    r"^(?:(?P<type>type)\s+)?(?P<name>[\w$]+)(?:\s+as\s+(?P<alias>[\w$]+))?$"
)


class ExportParser:
    """
    Extracts re-export entries from module source text.

    Statements are assumed to fit on one line. Lines that are not
    re-exports (declarations, local ``export { x }`` lists, imports)
    are ignored, and malformed re-exports are skipped rather than
    reported. Parsing never fails; the worst case is an empty list.
    """

    def parse(self, source_code: str) -> list[ExportEntry]:
        """Parse all re-export entries in source line order."""
        entries: list[ExportEntry] = []
        for index, line in enumerate(source_code.splitlines()):
            entries.extend(self.parse_line(line, index + 1))
        return entries

    def parse_line(self, line: str, line_number: int) -> list[ExportEntry]:
        """Parse a single line into zero or more entries."""
        trimmed = line.strip()
        if not trimmed.startswith("export"):
            return []

        match = _NAMESPACE_RE.match(trimmed)
        if match:
            return [
                ExportEntry(
                    specifier=NAMESPACE_SPECIFIER,
                    source=match.group("source"),
                    kind=ExportKind.NAMESPACE,
                    alias=match.group("alias"),
                    is_type_only=match.group("type") is not None,
                    origin_line=line_number,
                )
            ]

        match = _NAMED_RE.match(trimmed)
        if match:
            return list(
                self._parse_items(
                    match.group("items"),
                    source=match.group("source"),
                    statement_is_type=match.group("type") is not None,
                    line_number=line_number,
                )
            )

        return []

    def _parse_items(
        self,
        items: str,
        source: str,
        statement_is_type: bool,
        line_number: int,
    ) -> Iterable[ExportEntry]:
        """Yield one entry per well-formed item of an export list."""
        for raw_item in items.split(","):
            item = raw_item.strip()
            if not item:
                continue

            match = _ITEM_RE.match(item)
            if not match:
                continue

            name = match.group("name")
            alias = match.group("alias")
            if alias == name:
                alias = None

            yield ExportEntry(
                specifier=name,
                source=source,
                kind=ExportKind.DEFAULT if name == DEFAULT_SPECIFIER else ExportKind.NAMED,
                alias=alias,
                is_type_only=statement_is_type or match.group("type") is not None,
                origin_line=line_number,
            )


def is_barrel(entries: Iterable[ExportEntry]) -> bool:
    """A module is a barrel if it re-exports from at least one relative path."""
    return any(entry.is_relative for entry in entries)


_default_parser = ExportParser()


def parse_exports(content: str) -> list[ExportEntry]:
    """Parse re-export entries with the shared parser instance."""
    return _default_parser.parse(content)
