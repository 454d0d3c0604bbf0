"""Resolution, reconstruction and batch services."""

from barrel_resolver.services.barrel_resolver import BarrelResolver, is_type_declaration_file
from barrel_resolver.services.batch import (
    BatchFileResult,
    BatchProcessor,
    DiscoveredFile,
    discover_barrel_files,
)
from barrel_resolver.services.deduplication import remove_duplicates
from barrel_resolver.services.file_system import FileSystem, InMemoryFileSystem, LocalFileSystem
from barrel_resolver.services.loader import BarrelLoader
from barrel_resolver.services.reconstruction import (
    NamespaceExpander,
    expand_namespaces,
    reconstruct_source,
)
from barrel_resolver.services.sorting import sort_exports
from barrel_resolver.services.source_resolver import SOURCE_EXTENSIONS, SourceResolver

__all__ = [
    "SOURCE_EXTENSIONS",
    "BarrelLoader",
    "BarrelResolver",
    "BatchFileResult",
    "BatchProcessor",
    "DiscoveredFile",
    "FileSystem",
    "InMemoryFileSystem",
    "LocalFileSystem",
    "NamespaceExpander",
    "SourceResolver",
    "discover_barrel_files",
    "expand_namespaces",
    "is_type_declaration_file",
    "reconstruct_source",
    "remove_duplicates",
    "sort_exports",
]
