"""Regenerates export statements from resolved entries."""

from collections.abc import Callable, Iterable, Sequence

from barrel_resolver.core import ExportEntry, ExportKind

# Returns replacement entries for a namespace entry, or None to keep it
NamespaceExpander = Callable[[ExportEntry], Sequence[ExportEntry] | None]


def expand_namespaces(
    entries: Iterable[ExportEntry], expander: NamespaceExpander
) -> list[ExportEntry]:
    """Replace each namespace entry the expander can enumerate, in place."""
    expanded: list[ExportEntry] = []
    for entry in entries:
        replacement = expander(entry) if entry.kind == ExportKind.NAMESPACE else None
        if replacement:
            expanded.extend(replacement)
        else:
            expanded.append(entry)
    return expanded


def reconstruct_source(
    original_source: str,
    entries: Iterable[ExportEntry],
    namespace_expander: NamespaceExpander | None = None,
) -> str:
    """
    Rebuild a barrel module from its entries.

    The prologue (everything before the first ``export`` line, minus
    blank and ``//`` comment lines) is kept. Statements are then
    emitted per source in first-seen order: value namespaces, value
    defaults, one combined value list, and the same three groups for
    type-only entries.

    Returns the original source unchanged when there are no entries.
    """
    entries = list(entries)
    if not entries:
        return original_source

    if namespace_expander is not None:
        entries = expand_namespaces(entries, namespace_expander)

    lines = _prologue(original_source)

    # source -> (value entries, type-only entries)
    groups: dict[str, tuple[list[ExportEntry], list[ExportEntry]]] = {}
    for entry in entries:
        values, types = groups.setdefault(entry.source, ([], []))
        (types if entry.is_type_only else values).append(entry)

    for source, (values, types) in groups.items():
        lines.extend(_render_statements(values, source, type_only=False))
        lines.extend(_render_statements(types, source, type_only=True))

    return "\n".join(lines) + "\n"


def _prologue(original_source: str) -> list[str]:
    lines: list[str] = []
    for line in original_source.splitlines():
        trimmed = line.strip()
        if trimmed.startswith("export"):
            break
        if trimmed and not trimmed.startswith("//"):
            lines.append(line)
    return lines


def _render_statements(
    entries: list[ExportEntry], source: str, type_only: bool
) -> list[str]:
    """Render one source's entries of a single value/type flavor."""
    if not entries:
        return []

    keyword = "export type" if type_only else "export"
    statements: list[str] = []

    namespaces: list[str | None] = []
    for entry in entries:
        if entry.kind == ExportKind.NAMESPACE and entry.alias not in namespaces:
            namespaces.append(entry.alias)
    for alias in namespaces:
        if alias:
            statements.append(f'{keyword} * as {alias} from "{source}";')
        else:
            statements.append(f'{keyword} * from "{source}";')

    defaults = _unique_items(e for e in entries if e.kind == ExportKind.DEFAULT)
    for item in defaults:
        statements.append(f'{keyword} {{ {item} }} from "{source}";')

    named = _unique_items(e for e in entries if e.kind == ExportKind.NAMED)
    if named:
        statements.append(f'{keyword} {{ {", ".join(named)} }} from "{source}";')

    return statements


def _unique_items(entries: Iterable[ExportEntry]) -> list[str]:
    items: list[str] = []
    for entry in entries:
        item = _render_item(entry)
        if item not in items:
            items.append(item)
    return items


def _render_item(entry: ExportEntry) -> str:
    if entry.alias and entry.alias != entry.specifier:
        return f"{entry.specifier} as {entry.alias}"
    return entry.specifier
