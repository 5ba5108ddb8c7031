"""
Export rule: sort runs of re-export declarations and standalone export lists.

    export {a, b} from "A"
    export * from "A"
    export * as A from "A"

A comment block with a line of its own above a re-export starts a new chunk,
so commented sections are sorted independently. `export {b, a}` without a
source only has its bindings sorted.
"""

from typing import TYPE_CHECKING

from codegraph_sorter.config import SortOptions
from codegraph_sorter.defaults import DEFAULT_EXPORT_GROUPS
from codegraph_sorter.engine.chunks import extract_chunks
from codegraph_sorter.engine.render import maybe_report_sorting
from codegraph_sorter.engine.specifiers import print_with_sorted_specifiers
from codegraph_sorter.models import Binding, ChunkPlacement, Edit, Statement, StatementKind
from codegraph_sorter.rules.chunk_sort import sort_chunk

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode

RULE_NAME = "exports"


def is_side_effect_export(statement: Statement, source_code: "SourceCode") -> bool:
    return False


def get_specifiers(statement: Statement) -> tuple[Binding, ...]:
    # `export * from "a"` has none
    return statement.bindings


def has_grouping_comment(statement: Statement, previous: Statement | None, source_code: "SourceCode") -> bool:
    """A comment that starts after the previous statement's line and ends above this one"""
    return any(
        (previous is None or comment.start_line > previous.end_line) and comment.end_line < statement.start_line
        for comment in source_code.comments_before(statement.start)
    )


def make_chunk_classifier(source_code: "SourceCode"):
    def is_part_of_chunk(statement: Statement, previous: Statement | None) -> ChunkPlacement:
        if not statement.is_export_from:
            return ChunkPlacement.NOT_PART_OF_CHUNK
        if has_grouping_comment(statement, previous, source_code):
            return ChunkPlacement.PART_OF_NEW_CHUNK
        return ChunkPlacement.PART_OF_CHUNK

    return is_part_of_chunk


def sort_export_specifiers(statement: Statement, source_code: "SourceCode") -> Edit | None:
    """Sort the bindings of `export {b, a}` in place"""
    sorted_text = print_with_sorted_specifiers(statement, source_code, get_specifiers)
    return maybe_report_sorting(source_code, sorted_text, statement.start, statement.end, RULE_NAME)


def sort_exports(
    statements: list[Statement],
    source_code: "SourceCode",
    options: SortOptions | None = None,
) -> list[Edit]:
    """
    Sort every re-export chunk and standalone export list of a file.

    Args:
        statements: Top-level statements in source order
        source_code: Parsed source
        options: Groups and comparator (defaults when None)

    Returns:
        Edits in source order
    """
    options = options or SortOptions(groups=DEFAULT_EXPORT_GROUPS)
    group_set = options.group_set()

    edits = []
    for chunk in extract_chunks(statements, make_chunk_classifier(source_code)):
        edit = sort_chunk(
            chunk,
            source_code,
            group_set,
            options.sort_by,
            is_side_effect_export,
            get_specifiers,
            RULE_NAME,
        )
        if edit is not None:
            edits.append(edit)

    for statement in statements:
        if statement.kind == StatementKind.EXPORT_NAMED:
            edit = sort_export_specifiers(statement, source_code)
            if edit is not None:
                edits.append(edit)

    return sorted(edits, key=lambda edit: edit.start)
