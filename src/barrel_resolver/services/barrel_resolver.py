"""Recursive re-export resolution across the module graph."""

import os
from dataclasses import replace

from barrel_resolver.core import (
    ExportEntry,
    ExportKind,
    ResolutionContext,
    SourceReadError,
)
from barrel_resolver.logging import get_logger
from barrel_resolver.parsers import DeclarationScanner, ExportParser, is_barrel
from barrel_resolver.services.file_system import FileSystem
from barrel_resolver.services.source_resolver import SourceResolver

logger = get_logger(__name__)

_TYPE_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")

_MergeKey = tuple[str, ExportKind, bool, str]


def is_type_declaration_file(specifier: str, resolved_path: str) -> bool:
    """Heuristic for modules that only hold type declarations."""
    specifier_lower = specifier.lower()
    path_lower = resolved_path.lower()
    return (
        ".types" in specifier_lower
        or ".types." in path_lower
        or path_lower.endswith(_TYPE_DECLARATION_SUFFIXES)
    )


def _merge_key(entry: ExportEntry) -> _MergeKey:
    # Bare namespaces share the "*" name, so their source keeps them apart
    source = entry.source if entry.is_bare_namespace else ""
    return (entry.exported_name, entry.kind, entry.is_type_only, source)


class BarrelResolver:
    """
    Follows re-export chains from a barrel module to their origin.

    Each relative re-export is resolved to a file. Leaf files keep the
    entry as is (or expand a namespace into names when flattening is
    on); barrel files are resolved recursively and their bindings are
    spliced in with ``source`` rewritten to the path written in the
    original barrel, so regenerated statements stay valid relative to
    the file being rewritten.

    The resolver never raises for input problems: unreadable files,
    cycles and unparseable modules degrade to keeping the entry.
    """

    def __init__(
        self,
        file_system: FileSystem,
        *,
        flatten_namespaces: bool = False,
        parser: ExportParser | None = None,
        scanner: DeclarationScanner | None = None,
        source_resolver: SourceResolver | None = None,
    ) -> None:
        self._fs = file_system
        self._flatten_namespaces = flatten_namespaces
        self._parser = parser or ExportParser()
        self._scanner = scanner or DeclarationScanner()
        self._source_resolver = source_resolver or SourceResolver(file_system)

    def resolve_file(
        self, path: str, context: ResolutionContext | None = None
    ) -> list[ExportEntry]:
        """
        Resolve every re-export of the module at ``path``.

        A module already resolved in this context returns its recorded
        entries. A path still being resolved (a cycle) yields an empty
        list; this check runs before any recursive descent.
        """
        context = context if context is not None else ResolutionContext()
        path = os.path.normpath(path)

        cached = context.cached(path)
        if cached is not None:
            return cached

        if context.has_visited(path):
            logger.debug("resolution_cycle_skipped", path=path)
            return []
        context.visit(path)

        try:
            content = self._fs.read_file(path)
        except SourceReadError as e:
            logger.warning("source_unreadable", path=path, reason=e.reason)
            return []

        entries = self._resolve_entries(path, self._parser.parse(content), context)
        context.record(path, entries)
        return entries

    def resolve_source(
        self, content: str, path: str, context: ResolutionContext | None = None
    ) -> list[ExportEntry]:
        """Resolve a module whose content the caller already holds."""
        context = context if context is not None else ResolutionContext()
        path = os.path.normpath(path)
        context.visit(path)
        return self._resolve_entries(path, self._parser.parse(content), context)

    def expand_namespace(self, entry: ExportEntry, directory: str) -> list[ExportEntry] | None:
        """
        Expand ``export * from "./leaf"`` into explicit named entries.

        Returns None when the names cannot be determined statically:
        the entry is not a bare relative namespace, the target is
        missing, unreadable or itself a barrel, or it declares nothing.
        """
        if not entry.is_bare_namespace or not entry.is_relative:
            return None

        target = self._source_resolver.resolve(entry.source, directory)
        if target is None:
            return None

        try:
            content = self._fs.read_file(target)
        except SourceReadError as e:
            logger.warning("source_unreadable", path=target, reason=e.reason)
            return None

        if is_barrel(self._parser.parse(content)):
            return None
        return self._expand_leaf(entry, target, content) or None

    def _resolve_entries(
        self, path: str, entries: list[ExportEntry], context: ResolutionContext
    ) -> list[ExportEntry]:
        directory = os.path.dirname(path)
        # Re-assigning a key keeps its first position: last write wins,
        # order is first insertion
        accumulator: dict[_MergeKey, ExportEntry] = {}

        for entry in entries:
            for resolved in self._resolve_entry(entry, directory, context):
                accumulator[_merge_key(resolved)] = resolved

        logger.debug(
            "module_resolved",
            path=path,
            parsed=len(entries),
            resolved=len(accumulator),
        )
        return list(accumulator.values())

    def _resolve_entry(
        self, entry: ExportEntry, directory: str, context: ResolutionContext
    ) -> list[ExportEntry]:
        """Resolve one entry into the entries that replace it."""
        if not entry.is_relative:
            return [entry]

        target = self._source_resolver.resolve(entry.source, directory)
        if target is None:
            logger.debug("source_unresolved", source=entry.source, directory=directory)
            return [entry]

        try:
            target_content = self._fs.read_file(target)
        except SourceReadError as e:
            logger.warning("source_unreadable", path=target, reason=e.reason)
            return [entry]

        target_entries = self._parser.parse(target_content)

        if is_barrel(target_entries):
            return self._inline_barrel(entry, target, context)

        if (
            entry.is_bare_namespace
            and not target_entries
            and is_type_declaration_file(entry.source, target)
        ):
            type_entries = self._expand_type_declarations(entry, target, target_content)
            if type_entries:
                return type_entries

        if self._flatten_namespaces and entry.is_bare_namespace:
            expanded = self._expand_leaf(entry, target, target_content)
            if expanded:
                return expanded

        return [entry]

    def _inline_barrel(
        self, entry: ExportEntry, target: str, context: ResolutionContext
    ) -> list[ExportEntry]:
        """Splice a nested barrel's bindings in place of ``entry``."""
        nested = self.resolve_file(target, context)
        if not nested:
            return [entry]

        if entry.is_bare_namespace:
            spliced: list[ExportEntry] = []
            for nested_entry in nested:
                forwarded = nested_entry.forwarded_through(entry.source, entry.is_type_only)
                if forwarded is not None:
                    spliced.append(replace(forwarded, origin_line=entry.origin_line))
            return spliced or [entry]

        if entry.kind == ExportKind.NAMESPACE:
            # export * as ns keeps everything behind a single binding
            return [entry]

        # A named or default binding keeps its own form; it only inherits
        # type-only status from the binding it forwards
        for nested_entry in nested:
            if (
                nested_entry.kind != ExportKind.NAMESPACE
                and nested_entry.exported_name == entry.specifier
                and nested_entry.is_type_only
                and not entry.is_type_only
            ):
                return [replace(entry, is_type_only=True)]
        return [entry]

    def _expand_leaf(self, entry: ExportEntry, target: str, content: str) -> list[ExportEntry]:
        """Named entries for every binding a leaf module declares directly."""
        scan = self._scanner.scan(content, target)
        if scan.has_star_reexport:
            # Names forwarded from a package cannot be enumerated
            return []

        return [
            ExportEntry(
                specifier=declared.name,
                source=entry.source,
                kind=ExportKind.NAMED,
                is_type_only=entry.is_type_only or declared.is_type_only,
                origin_line=entry.origin_line,
            )
            for declared in scan.exports
        ]

    def _expand_type_declarations(
        self, entry: ExportEntry, target: str, content: str
    ) -> list[ExportEntry]:
        """Type-only named entries for a module matching the types heuristic."""
        scan = self._scanner.scan(content, target)
        entries = [
            ExportEntry(
                specifier=declared.name,
                source=entry.source,
                kind=ExportKind.NAMED,
                is_type_only=True,
                origin_line=entry.origin_line,
            )
            for declared in scan.type_declarations
        ]
        if entries:
            logger.debug(
                "type_namespace_recovered",
                source=entry.source,
                path=target,
                names=len(entries),
            )
        return entries
