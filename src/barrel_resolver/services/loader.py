"""Barrel loader: runs the resolution stages over one module."""

import os
from functools import partial

from barrel_resolver.config import Settings, get_settings
from barrel_resolver.core import ExportEntry, LoaderOptions, ResolutionContext
from barrel_resolver.logging import get_logger
from barrel_resolver.parsers import DeclarationScanner, ExportParser
from barrel_resolver.services.barrel_resolver import BarrelResolver
from barrel_resolver.services.deduplication import remove_duplicates
from barrel_resolver.services.file_system import FileSystem, LocalFileSystem
from barrel_resolver.services.reconstruction import expand_namespaces, reconstruct_source
from barrel_resolver.services.sorting import sort_exports

logger = get_logger(__name__)


class BarrelLoader:
    """
    Transforms barrel modules into a minimal set of export statements.

    Each stage is gated by LoaderOptions; a disabled stage passes its
    input through unchanged. Files that are not barrel files by name,
    and barrels without re-exports, are returned as is.
    """

    def __init__(
        self,
        options: LoaderOptions | None = None,
        file_system: FileSystem | None = None,
        settings: Settings | None = None,
        scanner: DeclarationScanner | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._options = options or self._settings.loader_options()
        self._fs = file_system or LocalFileSystem(self._settings.max_file_size_bytes)
        self._parser = ExportParser()
        self._resolver = BarrelResolver(
            self._fs,
            flatten_namespaces=self._options.convert_namespace_to_named,
            parser=self._parser,
            scanner=scanner,
        )

    @property
    def options(self) -> LoaderOptions:
        return self._options

    def is_barrel_file(self, file_path: str) -> bool:
        """Check whether a file is a barrel by its name (e.g. ``index.ts``)."""
        return os.path.basename(file_path) in self._settings.barrel_file_names

    def collect_exports(self, source: str, file_path: str) -> list[ExportEntry]:
        """
        Run every enabled stage except reconstruction.

        Args:
            source: Content of the module at ``file_path``.
            file_path: Path used to resolve relative re-exports.

        Returns:
            Final entries, deduplicated and sorted as configured.
        """
        if self._options.resolve_barrel_exports:
            # A fresh context per top-level call
            entries = self._resolver.resolve_source(source, file_path, ResolutionContext())
        else:
            entries = self._parser.parse(source)

        logger.debug(
            "exports_collected",
            path=file_path,
            total=len(entries),
            type_exports=sum(1 for e in entries if e.is_type_only),
            namespace_exports=sum(1 for e in entries if e.is_bare_namespace),
        )

        if not entries:
            return entries

        if self._options.convert_namespace_to_named and not self._options.resolve_barrel_exports:
            directory = os.path.dirname(os.path.normpath(file_path))
            entries = expand_namespaces(
                entries, partial(self._resolver.expand_namespace, directory=directory)
            )

        if self._options.remove_duplicates:
            before = len(entries)
            entries = remove_duplicates(entries)
            if len(entries) < before:
                logger.debug(
                    "duplicates_removed",
                    path=file_path,
                    removed=before - len(entries),
                )

        if self._options.sort:
            entries = sort_exports(entries)
            logger.debug("exports_sorted", path=file_path)

        return entries

    def transform(self, source: str, file_path: str) -> tuple[str, list[ExportEntry]]:
        """Transform a barrel module, returning the new text and its entries."""
        if not self.is_barrel_file(file_path):
            return source, []

        logger.debug("barrel_processing_started", path=file_path)
        entries = self.collect_exports(source, file_path)
        if not entries:
            logger.debug("no_exports_found", path=file_path)
            return source, entries

        transformed = reconstruct_source(source, entries)
        if transformed != source:
            logger.debug("barrel_transformed", path=file_path, length=len(transformed))
        return transformed, entries

    def process(self, source: str, file_path: str) -> str:
        """Transform a barrel module, returning the new source text."""
        transformed, _ = self.transform(source, file_path)
        return transformed

    def process_file(self, file_path: str) -> str:
        """Read a barrel module through the file system and transform it."""
        return self.process(self._fs.read_file(file_path), file_path)
