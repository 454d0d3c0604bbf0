"""Scanner for directly declared exports using tree-sitter."""

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from barrel_resolver.core import DEFAULT_SPECIFIER, DeclarationScan, DeclaredExport
from barrel_resolver.logging import get_logger

logger = get_logger(__name__)

# Declarations that only exist at compile time
_TYPE_DECLARATIONS = {
    "interface_declaration": "interface",
    "type_alias_declaration": "type_alias",
}

# Declarations that produce a runtime binding
_VALUE_DECLARATIONS = {
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_signature": "function",
    "class_declaration": "class",
    "abstract_class_declaration": "class",
    "enum_declaration": "enum",
    "internal_module": "namespace",
    "module": "namespace",
}

_VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})

_JSX_EXTENSIONS = (".tsx", ".jsx")


class DeclarationScanner:
    """
    Extracts the names a module exports through its own declarations.

    Uses the tree-sitter TypeScript grammar (TSX for ``.tsx``/``.jsx``)
    and only looks at top-level ``export`` statements. Default exports
    are skipped since ``export *`` never forwards them.
    """

    def __init__(self) -> None:
        self._typescript = Parser(Language(ts_typescript.language_typescript()))
        self._tsx = Parser(Language(ts_typescript.language_tsx()))

    def scan(self, source_code: str, file_path: str = "") -> DeclarationScan:
        """
        Scan source code for directly declared exports.

        Args:
            source_code: The raw module content.
            file_path: Used to pick the grammar and for diagnostics.

        Returns:
            DeclarationScan with names in source order. An unparseable
            module yields an empty scan.
        """
        parser = self._tsx if file_path.lower().endswith(_JSX_EXTENSIONS) else self._typescript
        source_bytes = source_code.encode("utf-8")

        try:
            tree = parser.parse(source_bytes)
        except Exception as e:
            logger.warning("declaration_scan_failed", path=file_path, error=str(e))
            return DeclarationScan()

        exports: list[DeclaredExport] = []
        seen: set[str] = set()
        has_star = False

        for node in tree.root_node.children:
            if node.type != "export_statement":
                continue
            if self._is_star_reexport(node):
                has_star = True
                continue
            for declared in self._process_export(node, source_bytes):
                if declared.name == DEFAULT_SPECIFIER or declared.name in seen:
                    continue
                seen.add(declared.name)
                exports.append(declared)

        return DeclarationScan(exports=tuple(exports), has_star_reexport=has_star)

    def _process_export(self, node: Node, source_bytes: bytes) -> list[DeclaredExport]:
        """Extract names from a single ``export_statement`` node."""
        if self._has_keyword(node, "default"):
            return []

        line = node.start_point[0] + 1
        statement_is_type = self._has_keyword(node, "type")

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return self._process_declaration(declaration, source_bytes, line)

        results: list[DeclaredExport] = []
        for child in node.named_children:
            if child.type == "export_clause":
                results.extend(
                    self._process_export_clause(child, source_bytes, statement_is_type, line)
                )
            elif child.type == "namespace_export":
                # export * as ns from "pkg" binds a single name
                name = self._namespace_export_name(child, source_bytes)
                if name:
                    results.append(
                        DeclaredExport(
                            name=name,
                            is_type_only=statement_is_type,
                            declaration="clause",
                            line=line,
                        )
                    )
        return results

    def _process_declaration(
        self, node: Node, source_bytes: bytes, line: int
    ) -> list[DeclaredExport]:
        """Extract the bound name(s) of a declaration node."""
        if node.type == "ambient_declaration":
            # export declare ...
            for child in node.named_children:
                results = self._process_declaration(child, source_bytes, line)
                if results:
                    return results
            return []

        if node.type in _VARIABLE_DECLARATIONS:
            results: list[DeclaredExport] = []
            for declarator in node.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is None:
                    continue
                for name in self._pattern_names(name_node, source_bytes):
                    results.append(
                        DeclaredExport(
                            name=name, is_type_only=False, declaration="variable", line=line
                        )
                    )
            return results

        if node.type in _TYPE_DECLARATIONS:
            kind, is_type_only = _TYPE_DECLARATIONS[node.type], True
        elif node.type in _VALUE_DECLARATIONS:
            kind, is_type_only = _VALUE_DECLARATIONS[node.type], False
        else:
            return []

        name_node = node.child_by_field_name("name")
        # declare module "pkg" names are strings, not bindings
        if name_node is None or name_node.type == "string":
            return []

        return [
            DeclaredExport(
                name=self._get_node_text(name_node, source_bytes),
                is_type_only=is_type_only,
                declaration=kind,
                line=line,
            )
        ]

    def _process_export_clause(
        self, node: Node, source_bytes: bytes, statement_is_type: bool, line: int
    ) -> list[DeclaredExport]:
        """Extract exported names from ``{ a, b as c, type D }``."""
        results: list[DeclaredExport] = []
        for spec in node.named_children:
            if spec.type != "export_specifier":
                continue
            name_node = spec.child_by_field_name("name")
            alias_node = spec.child_by_field_name("alias")
            exported = alias_node or name_node
            if exported is None:
                continue
            results.append(
                DeclaredExport(
                    name=self._get_node_text(exported, source_bytes).strip("'\""),
                    is_type_only=statement_is_type or self._has_keyword(spec, "type"),
                    declaration="clause",
                    line=line,
                )
            )
        return results

    def _pattern_names(self, node: Node, source_bytes: bytes) -> list[str]:
        """Collect identifiers bound by a (possibly destructuring) pattern."""
        match node.type:
            case "identifier" | "shorthand_property_identifier_pattern":
                return [self._get_node_text(node, source_bytes)]
            case "pair_pattern":
                value = node.child_by_field_name("value")
                return self._pattern_names(value, source_bytes) if value else []
            case "object_assignment_pattern" | "assignment_pattern":
                left = node.child_by_field_name("left")
                return self._pattern_names(left, source_bytes) if left else []
            case "object_pattern" | "array_pattern" | "rest_pattern":
                names: list[str] = []
                for child in node.named_children:
                    names.extend(self._pattern_names(child, source_bytes))
                return names
            case _:
                return []

    def _namespace_export_name(self, node: Node, source_bytes: bytes) -> str | None:
        for child in node.named_children:
            if child.type in ("identifier", "string"):
                return self._get_node_text(child, source_bytes).strip("'\"")
        return None

    def _is_star_reexport(self, node: Node) -> bool:
        """True for ``export * from "src"`` without an ``as`` binding."""
        has_star = any(child.type == "*" for child in node.children)
        has_binding = any(child.type == "namespace_export" for child in node.children)
        return has_star and not has_binding

    def _has_keyword(self, node: Node, keyword: str) -> bool:
        """Check for an anonymous keyword token among direct children."""
        return any(not child.is_named and child.type == keyword for child in node.children)

    def _get_node_text(self, node: Node, source_bytes: bytes) -> str:
        """Extract text from node."""
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
