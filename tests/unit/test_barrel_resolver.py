"""Tests for recursive re-export resolution."""

import pytest

from barrel_resolver.core import ExportEntry, ExportKind, ResolutionContext, SourceReadError
from barrel_resolver.parsers import DeclarationScanner
from barrel_resolver.services import BarrelResolver, InMemoryFileSystem
from barrel_resolver.services.barrel_resolver import is_type_declaration_file


def _summary(entries: list[ExportEntry]) -> list[tuple[str, str, str, bool]]:
    return [(e.kind.value, e.exported_name, e.source, e.is_type_only) for e in entries]


class UnreadableFileSystem(InMemoryFileSystem):
    """Reports some paths as existing but fails to read them."""

    def __init__(self, files: dict[str, str], unreadable: set[str]) -> None:
        super().__init__(files)
        self._unreadable = unreadable

    def exists(self, path: str) -> bool:
        return path in self._unreadable or super().exists(path)

    def read_file(self, path: str) -> str:
        if path in self._unreadable:
            raise SourceReadError(path, "permission denied")
        return super().read_file(path)


class TestBarrelResolver:
    """Tests for BarrelResolver."""

    def test_nested_barrel_is_spliced(
        self, component_library: InMemoryFileSystem, scanner: DeclarationScanner
    ):
        resolver = BarrelResolver(component_library, scanner=scanner)

        result = resolver.resolve_file("/app/src/index.ts")

        assert _summary(result) == [
            ("named", "Button", "./components", False),
            ("named", "Card", "./components", False),
            ("named", "CardProps", "./components", True),
            ("named", "icons", "./components", False),
            ("namespace", "*", "./utils", False),
            ("named", "User", "./model.types", True),
            ("named", "Id", "./model.types", True),
            ("named", "Role", "./model.types", True),
        ]

    def test_spliced_entries_take_the_barrel_line(
        self, component_library: InMemoryFileSystem, scanner: DeclarationScanner
    ):
        resolver = BarrelResolver(component_library, scanner=scanner)

        result = resolver.resolve_file("/app/src/index.ts")

        assert {e.origin_line for e in result if e.source == "./components"} == {4}

    def test_flatten_expands_leaf_namespaces(
        self, component_library: InMemoryFileSystem, scanner: DeclarationScanner
    ):
        resolver = BarrelResolver(component_library, flatten_namespaces=True, scanner=scanner)

        result = resolver.resolve_file("/app/src/index.ts")
        utils = [e for e in result if e.source == "./utils"]

        assert _summary(utils) == [
            ("named", "formatDate", "./utils", False),
            ("named", "DateLike", "./utils", True),
        ]

    def test_cycle_terminates(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/a.ts": 'export * from "./b";\n',
                "/x/b.ts": 'export * from "./a";\n',
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/a.ts")

        assert _summary(result) == [("namespace", "*", "./b", False)]

    def test_visited_path_yields_nothing(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem({"/x/a.ts": 'export * from "./b";\n'})
        resolver = BarrelResolver(files, scanner=scanner)
        context = ResolutionContext(visited={"/x/a.ts"})

        assert resolver.resolve_file("/x/a.ts", context) == []

    def test_context_records_visited_files(
        self, component_library: InMemoryFileSystem, scanner: DeclarationScanner
    ):
        resolver = BarrelResolver(component_library, scanner=scanner)
        context = ResolutionContext()

        resolver.resolve_file("/app/src/index.ts", context)

        assert context.visited == {"/app/src/index.ts", "/app/src/components/index.ts"}

    def test_last_write_wins_in_first_position(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": (
                    'export { A } from "./one";\n'
                    'export { B } from "./one";\n'
                    'export { A } from "./two";\n'
                ),
                "/x/one.ts": "export const A = 1;\nexport const B = 2;\n",
                "/x/two.ts": "export const A = 3;\n",
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert [(e.exported_name, e.source, e.origin_line) for e in result] == [
            ("A", "./two", 3),
            ("B", "./one", 2),
        ]

    def test_value_and_type_bindings_are_kept_apart(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export { X } from "./v";\nexport type { X } from "./t";\n',
                "/x/v.ts": "export const X = 1;\n",
                "/x/t.ts": "export type X = number;\n",
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [
            ("named", "X", "./v", False),
            ("named", "X", "./t", True),
        ]

    def test_multiple_bare_namespaces_are_kept(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export * from "./a";\nexport * from "./b";\n',
                "/x/a.ts": "export const a = 1;\n",
                "/x/b.ts": "export const b = 1;\n",
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert [e.source for e in result] == ["./a", "./b"]

    def test_type_only_namespace_through_barrel(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export type * from "./inner";\n',
                "/x/inner/index.ts": 'export { Foo } from "./foo";\n',
                "/x/inner/foo.ts": "export class Foo {}\n",
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [("named", "Foo", "./inner", True)]

    def test_named_binding_inherits_type_only(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export { Props, View } from "./ui";\n',
                "/x/ui/index.ts": (
                    'export type { Props } from "./View";\n'
                    'export { View } from "./View";\n'
                ),
                "/x/ui/View.ts": "export interface Props {}\nexport class View {}\n",
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [
            ("named", "Props", "./ui", True),
            ("named", "View", "./ui", False),
        ]

    def test_siblings_through_one_barrel_inherit_type_only(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export { A } from "./sub";\nexport { B } from "./sub";\n',
                "/x/sub/index.ts": (
                    'export type { A } from "./a";\n'
                    'export type { B } from "./b";\n'
                ),
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [
            ("named", "A", "./sub", True),
            ("named", "B", "./sub", True),
        ]

    def test_resolved_barrels_are_recorded(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export { A } from "./sub";\n',
                "/x/sub/index.ts": 'export type { A } from "./a";\n',
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)
        context = ResolutionContext()

        resolver.resolve_file("/x/index.ts", context)

        assert _summary(context.resolved["/x/sub/index.ts"]) == [("named", "A", "./a", True)]
        assert _summary(resolver.resolve_file("/x/sub/index.ts", context)) == [
            ("named", "A", "./a", True)
        ]

    def test_aliased_namespace_of_barrel_is_kept(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export * as ui from "./ui";\n',
                "/x/ui/index.ts": 'export { View } from "./View";\n',
                "/x/ui/View.ts": "export class View {}\n",
            }
        )
        resolver = BarrelResolver(files, flatten_namespaces=True, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert len(result) == 1
        assert result[0].kind == ExportKind.NAMESPACE
        assert result[0].alias == "ui"

    @pytest.mark.parametrize(
        "line",
        [
            'export * from "react";',
            'export * from "./missing";',
            'export { x } from "@scope/pkg";',
        ],
    )
    def test_unresolvable_entries_are_kept(self, scanner: DeclarationScanner, line: str):
        files = InMemoryFileSystem({"/x/index.ts": line + "\n"})
        resolver = BarrelResolver(files, flatten_namespaces=True, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert len(result) == 1
        assert result[0].origin_line == 1

    def test_unreadable_target_keeps_entry(self, scanner: DeclarationScanner):
        files = UnreadableFileSystem(
            {"/x/index.ts": 'export * from "./locked";\n'},
            unreadable={"/x/locked.ts"},
        )
        resolver = BarrelResolver(files, flatten_namespaces=True, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [("namespace", "*", "./locked", False)]

    def test_unreadable_root_yields_nothing(self, scanner: DeclarationScanner):
        resolver = BarrelResolver(InMemoryFileSystem(), scanner=scanner)

        assert resolver.resolve_file("/x/index.ts") == []

    def test_leaf_with_package_star_is_not_flattened(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export * from "./vendor";\n',
                "/x/vendor.ts": 'export * from "react";\nexport const local = 1;\n',
            }
        )
        resolver = BarrelResolver(files, flatten_namespaces=True, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [("namespace", "*", "./vendor", False)]

    def test_types_module_without_type_declarations_is_kept(self, scanner: DeclarationScanner):
        files = InMemoryFileSystem(
            {
                "/x/index.ts": 'export * from "./consts.types";\n',
                "/x/consts.types.ts": "export const VERSION = 1;\n",
            }
        )
        resolver = BarrelResolver(files, scanner=scanner)

        result = resolver.resolve_file("/x/index.ts")

        assert _summary(result) == [("namespace", "*", "./consts.types", False)]

    def test_resolve_source_uses_given_content(
        self, component_library: InMemoryFileSystem, scanner: DeclarationScanner
    ):
        resolver = BarrelResolver(component_library, scanner=scanner)

        result = resolver.resolve_source('export * from "./utils";\n', "/app/src/index.ts")

        assert _summary(result) == [("namespace", "*", "./utils", False)]


class TestExpandNamespace:
    """Tests for BarrelResolver.expand_namespace."""

    @pytest.fixture
    def resolver(
        self, component_library: InMemoryFileSystem, scanner: DeclarationScanner
    ) -> BarrelResolver:
        return BarrelResolver(component_library, scanner=scanner)

    def test_leaf_is_expanded(self, resolver: BarrelResolver):
        entry = ExportEntry(specifier="*", source="./icons", kind=ExportKind.NAMESPACE)

        result = resolver.expand_namespace(entry, "/app/src/components")

        assert [e.exported_name for e in result] == ["Star", "Heart"]
        assert all(e.source == "./icons" for e in result)

    def test_barrel_is_not_expanded(self, resolver: BarrelResolver):
        entry = ExportEntry(specifier="*", source="./components", kind=ExportKind.NAMESPACE)

        assert resolver.expand_namespace(entry, "/app/src") is None

    @pytest.mark.parametrize(
        "entry",
        [
            ExportEntry(specifier="*", source="react", kind=ExportKind.NAMESPACE),
            ExportEntry(specifier="*", source="./icons", kind=ExportKind.NAMESPACE, alias="i"),
            ExportEntry(specifier="Star", source="./icons", kind=ExportKind.NAMED),
            ExportEntry(specifier="*", source="./nope", kind=ExportKind.NAMESPACE),
        ],
    )
    def test_unexpandable_entries(self, resolver: BarrelResolver, entry: ExportEntry):
        assert resolver.expand_namespace(entry, "/app/src/components") is None


class TestIsTypeDeclarationFile:
    """Tests for the type-declarations heuristic."""

    @pytest.mark.parametrize(
        ("specifier", "path", "expected"),
        [
            ("./model.types", "/a/model.types.ts", True),
            ("./model", "/a/model.types.ts", True),
            ("./globals", "/a/globals.d.ts", True),
            ("./model", "/a/model.ts", False),
            ("./typesafe", "/a/typesafe.ts", False),
        ],
    )
    def test_heuristic(self, specifier: str, path: str, expected: bool):
        assert is_type_declaration_file(specifier, path) is expected
