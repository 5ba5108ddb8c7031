"""
Shared chunk pipeline of the import and export rules.
"""

from typing import TYPE_CHECKING

from codegraph_sorter.common.observability import get_logger
from codegraph_sorter.engine.grouping import GroupSet
from codegraph_sorter.engine.items import IsSideEffect, build_items
from codegraph_sorter.engine.render import maybe_report_sorting, print_sorted_items
from codegraph_sorter.engine.sorting import sort_groups
from codegraph_sorter.engine.specifiers import GetSpecifiers
from codegraph_sorter.models import Edit, SortBy, Statement

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode

logger = get_logger(__name__)


def sort_chunk(
    chunk: list[Statement],
    source_code: "SourceCode",
    group_set: GroupSet,
    sort_by: SortBy,
    is_side_effect: IsSideEffect,
    get_specifiers: GetSpecifiers,
    rule: str,
) -> Edit | None:
    """
    Sort one chunk.

    Args:
        chunk: Reorderable statements
        source_code: Parsed source
        group_set: Compiled groups
        sort_by: Comparator inside a group
        is_side_effect: Side-effect predicate of the rule
        get_specifiers: `{...}` bindings of a declaration
        rule: Rule name recorded on the edit

    Returns:
        Edit for the whole chunk, or None when it is already sorted
    """
    items = build_items(chunk, source_code, is_side_effect, get_specifiers)
    groups = sort_groups(group_set.classify(items), sort_by)
    sorted_text = print_sorted_items(groups, items, source_code)

    start, end = items[0].start, items[-1].end
    edit = maybe_report_sorting(source_code, sorted_text, start, end, rule)

    logger.debug(
        "chunk_checked",
        rule=rule,
        file=source_code.source.file_path,
        first_line=chunk[0].start_line,
        statements=len(chunk),
        groups=len(groups),
        changed=edit is not None,
    )
    return edit
