"""Core domain models - pure Python dataclasses with no framework dependencies."""

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Self

RELATIVE_MARKER = "."
NAMESPACE_SPECIFIER = "*"
DEFAULT_SPECIFIER = "default"


class ExportKind(StrEnum):
    """Syntactic form of a re-export."""

    NAMED = "named"  # export { a, b as c } from "src"
    DEFAULT = "default"  # export { default as X } from "src"
    NAMESPACE = "namespace"  # export * (as ns) from "src"


@dataclass(frozen=True, slots=True)
class ExportEntry:
    """
    One re-exported binding.

    Immutable value object. Downstream stages derive new entries
    (``dataclasses.replace``) instead of mutating them.
    """

    specifier: str  # exported name, "*" or "default"
    source: str  # import path exactly as written
    kind: ExportKind
    alias: str | None = None
    is_type_only: bool = False
    # 1-indexed line in the originating file, 0 for synthesized entries
    origin_line: int = 0

    def __post_init__(self) -> None:
        if not self.specifier:
            raise ValueError("ExportEntry specifier cannot be empty")
        if not self.source:
            raise ValueError("ExportEntry source cannot be empty")
        if self.kind == ExportKind.NAMESPACE and self.specifier != NAMESPACE_SPECIFIER:
            raise ValueError("namespace exports must use the '*' specifier")
        if self.origin_line < 0:
            raise ValueError("origin_line must be >= 0")

    @property
    def exported_name(self) -> str:
        """Name the binding is visible under to importers of the barrel."""
        return self.alias or self.specifier

    @property
    def identity(self) -> tuple[str, str, ExportKind, bool]:
        """Deduplication identity (origin_line is not part of it)."""
        return (self.exported_name, self.source, self.kind, self.is_type_only)

    @property
    def is_relative(self) -> bool:
        return self.source.startswith(RELATIVE_MARKER)

    @property
    def is_bare_namespace(self) -> bool:
        """True for ``export * from "src"`` (no ``as ns`` binding)."""
        return self.kind == ExportKind.NAMESPACE and self.alias is None

    def forwarded_through(self, source: str, type_only: bool = False) -> Self | None:
        """
        Re-express this entry as seen through a barrel at ``source``.

        ``export *`` forwards every binding except ``default``, so an
        unaliased default returns None. Aliased bindings become plain
        named exports of the barrel; bare namespaces stay namespaces.
        """
        is_type_only = self.is_type_only or type_only
        if self.is_bare_namespace:
            return replace(self, source=source, is_type_only=is_type_only)
        if self.exported_name == DEFAULT_SPECIFIER:
            return None
        return replace(
            self,
            specifier=self.exported_name,
            alias=None,
            source=source,
            kind=ExportKind.NAMED,
            is_type_only=is_type_only,
        )


@dataclass(frozen=True, slots=True)
class DeclaredExport:
    """A name a module declares and exports directly (not a re-export)."""

    name: str
    is_type_only: bool
    declaration: str  # e.g. "function", "interface", "clause"
    line: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("DeclaredExport name cannot be empty")


@dataclass(frozen=True, slots=True)
class DeclarationScan:
    """Result of scanning a module for directly declared exports."""

    exports: tuple[DeclaredExport, ...] = ()
    # True when the module re-exports "*" from somewhere, making its
    # full name set unknowable without following that source
    has_star_reexport: bool = False

    @property
    def type_declarations(self) -> tuple[DeclaredExport, ...]:
        """Type aliases, interfaces, enums and ``export type { ... }`` names."""
        return tuple(
            d
            for d in self.exports
            if d.is_type_only or d.declaration in ("type_alias", "interface", "enum")
        )


@dataclass(slots=True)
class ResolutionContext:
    """
    Per-resolution mutable state.

    Created once per top-level resolve call and threaded by reference
    through every recursive call. Never shared between resolutions.
    """

    visited: set[str] = field(default_factory=set)
    # Finished modules; a visited path missing here is still being resolved
    resolved: dict[str, list[ExportEntry]] = field(default_factory=dict)

    def has_visited(self, path: str) -> bool:
        return path in self.visited

    def visit(self, path: str) -> None:
        self.visited.add(path)

    def cached(self, path: str) -> list[ExportEntry] | None:
        entries = self.resolved.get(path)
        return list(entries) if entries is not None else None

    def record(self, path: str, entries: list[ExportEntry]) -> None:
        self.resolved[path] = list(entries)


@dataclass(frozen=True, slots=True)
class LoaderOptions:
    """Stage toggles. A disabled stage behaves as the identity."""

    remove_duplicates: bool = True
    sort: bool = False
    resolve_barrel_exports: bool = False
    convert_namespace_to_named: bool = False
