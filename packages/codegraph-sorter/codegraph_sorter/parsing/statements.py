"""
Top-level statement extraction.

Turns the children of a Tree-sitter `program` node into Statement records:
kind, module path, type-only marker and the `{...}` bindings.
"""

from typing import TYPE_CHECKING

from codegraph_sorter.models import Binding, Statement, StatementKind
from codegraph_sorter.parsing.source_code import COMMENT_NODE_TYPES

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

    from codegraph_sorter.parsing.source_code import SourceCode

KIND_MARKERS = ("type", "typeof")


def collect_statements(source_code: "SourceCode") -> list[Statement]:
    """
    Build statements for every top-level node except comments.

    Args:
        source_code: Parsed source

    Returns:
        Statements in source order
    """
    statements = []
    for node in source_code.tree.root_node.children:
        if node.type in COMMENT_NODE_TYPES:
            continue
        statement = _build_statement(source_code, node)
        if statement is not None:
            statements.append(statement)
    return statements


def _build_statement(source_code: "SourceCode", node: "TSNode") -> Statement | None:
    start, end = source_code.node_range(node)
    tokens = source_code.get_tokens(start, end)
    if not tokens:
        return None

    first, last = tokens[0], tokens[-1]
    fields = {
        "start": first.start,
        "end": last.end,
        "start_line": first.start_line,
        "end_line": last.end_line,
    }

    if node.type == "import_statement":
        return Statement(**fields, **_import_fields(source_code, node))
    if node.type == "export_statement":
        return Statement(**fields, **_export_fields(source_code, node))
    return Statement(kind=StatementKind.OTHER, **fields)


def _import_fields(source_code: "SourceCode", node: "TSNode") -> dict:
    if _child_of_type(node, "import_require_clause") is not None:
        return {"kind": StatementKind.IMPORT_EQUALS}

    clause = _child_of_type(node, "import_clause")
    bindings: list[Binding] = []
    if clause is not None:
        named = _child_of_type(clause, "named_imports")
        if named is not None:
            for specifier in named.named_children:
                if specifier.type != "import_specifier":
                    continue
                name = _field(specifier, "name", 0)
                alias = _field(specifier, "alias", 1)
                bindings.append(
                    Binding(
                        name=_name_text(source_code, name),
                        local=_name_text(source_code, alias or name),
                        kind=_kind_marker(specifier),
                    )
                )

    return {
        "kind": StatementKind.IMPORT,
        "source": _source_text(source_code, node),
        "module_kind": _kind_marker(node),
        "bindings": tuple(bindings),
        "has_clause": clause is not None,
    }


def _export_fields(source_code: "SourceCode", node: "TSNode") -> dict:
    if _child_of_type(node, "default") is not None:
        return {"kind": StatementKind.EXPORT_DECLARATION}

    source = _source_text(source_code, node)
    clause = _child_of_type(node, "export_clause")

    if source is None and clause is None:
        return {"kind": StatementKind.EXPORT_DECLARATION}

    bindings: list[Binding] = []
    if clause is not None:
        for specifier in clause.named_children:
            if specifier.type != "export_specifier":
                continue
            name = _field(specifier, "name", 0)
            alias = _field(specifier, "alias", 1)
            bindings.append(
                Binding(
                    name=_name_text(source_code, alias or name),
                    local=_name_text(source_code, name),
                    kind=_kind_marker(specifier),
                )
            )

    if source is None:
        kind = StatementKind.EXPORT_NAMED
    elif clause is None:
        kind = StatementKind.EXPORT_ALL
    else:
        kind = StatementKind.EXPORT_FROM

    return {
        "kind": kind,
        "source": source,
        "module_kind": _kind_marker(node),
        "bindings": tuple(bindings),
        "has_clause": clause is not None,
    }


# ============================================================
# Node helpers
# ============================================================


def _child_of_type(node: "TSNode", node_type: str) -> "TSNode | None":
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _field(node: "TSNode", name: str, position: int) -> "TSNode | None":
    """Field child, falling back to the n-th name-like child"""
    child = node.child_by_field_name(name)
    if child is not None:
        return child
    candidates = [c for c in node.children if c.is_named and c.type != "comment"]
    return candidates[position] if position < len(candidates) else None


def _kind_marker(node: "TSNode") -> str:
    """`type`/`typeof` keyword directly inside the node, else "value" """
    for child in node.children:
        if not child.is_named and child.type in KIND_MARKERS:
            return child.type
    return "value"


def _source_text(source_code: "SourceCode", node: "TSNode") -> str | None:
    source = node.child_by_field_name("source")
    if source is None:
        # `import "x"` or `... from "x"`, never `export default "x"`
        previous = None
        for child in node.children:
            if child.type == "string" and (node.type == "import_statement" or previous == "from"):
                source = child
                break
            previous = child.type
    if source is None:
        return None
    return _unquote(source_code.node_text(source))


def _name_text(source_code: "SourceCode", node: "TSNode | None") -> str:
    if node is None:
        return ""
    text = source_code.node_text(node)
    return _unquote(text) if node.type == "string" else text


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return text[1:-1]
    return text
