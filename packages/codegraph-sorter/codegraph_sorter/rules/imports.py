"""
Import rule: sort runs of consecutive import declarations.

    import def, { a, b as c, type d } from "A"
                  ^  ^^^^^^  ^^^^^^
Only the named bindings inside `{...}` are reordered within a declaration;
the default and namespace bindings stay where they are.
"""

from typing import TYPE_CHECKING

from codegraph_sorter.config import SortOptions
from codegraph_sorter.defaults import DEFAULT_IMPORT_GROUPS
from codegraph_sorter.engine.chunks import extract_chunks
from codegraph_sorter.models import Binding, ChunkPlacement, Edit, Statement
from codegraph_sorter.rules.chunk_sort import sort_chunk

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode

RULE_NAME = "imports"


def is_part_of_chunk(statement: Statement, previous: Statement | None) -> ChunkPlacement:
    return ChunkPlacement.PART_OF_CHUNK if statement.is_import else ChunkPlacement.NOT_PART_OF_CHUNK


def is_side_effect_import(statement: Statement, source_code: "SourceCode") -> bool:
    """
    `import "setup"`, but not `import {} from "setup"` and not `import type {} from "setup"`.
    """
    return not statement.has_clause and not statement.bindings and statement.module_kind == "value"


def get_specifiers(statement: Statement) -> tuple[Binding, ...]:
    return statement.bindings


def sort_imports(
    statements: list[Statement],
    source_code: "SourceCode",
    options: SortOptions | None = None,
) -> list[Edit]:
    """
    Sort every import chunk of a file.

    Args:
        statements: Top-level statements in source order
        source_code: Parsed source
        options: Groups and comparator (defaults when None)

    Returns:
        One edit per chunk that is not sorted yet
    """
    options = options or SortOptions(groups=DEFAULT_IMPORT_GROUPS)
    group_set = options.group_set()

    edits = []
    for chunk in extract_chunks(statements, is_part_of_chunk):
        edit = sort_chunk(
            chunk,
            source_code,
            group_set,
            options.sort_by,
            is_side_effect_import,
            get_specifiers,
            RULE_NAME,
        )
        if edit is not None:
            edits.append(edit)
    return edits
