"""
Rendering sorted items back to text and turning the result into an edit.
"""

from collections import Counter
from typing import TYPE_CHECKING

from codegraph_sorter.common.exceptions import InvariantViolation
from codegraph_sorter.engine.grouping import SortedGroups
from codegraph_sorter.models import Edit, Item, Statement, Token, TokenKind

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode


def _next_code_on_line(statement: Statement, source_code: "SourceCode") -> Token | None:
    """First token after the statement that is not one of its own trailing comments"""
    token = source_code.token_after(statement.end, include_comments=True)
    while token is not None and (
        token.kind == TokenKind.LINE_COMMENT
        or (token.kind == TokenKind.BLOCK_COMMENT and token.end_line == statement.end_line)
    ):
        token = source_code.token_after(token.end, include_comments=True)
    return token


def print_sorted_items(groups: SortedGroups, original_items: list[Item], source_code: "SourceCode") -> str:
    """
    Join sorted items: one line break between items, a blank line between groups.

    Args:
        groups: Sorted, non-empty groups of pattern buckets
        original_items: Items in original order
        source_code: Parsed source

    Returns:
        Replacement text for the chunk
    """
    newline = source_code.newline
    sorted_text = (newline + newline).join(
        newline.join(newline.join(item.code for item in bucket) for bucket in group) for group in groups
    )

    # A trailing line comment on the new last item must not comment out code
    # that followed the old last item on the same line
    last_sorted = groups[-1][-1][-1]
    last_original = original_items[-1].statement
    if last_sorted.needs_newline:
        next_token = _next_code_on_line(last_original, source_code)
        if next_token is not None and next_token.start_line == last_original.end_line:
            sorted_text += newline

    return sorted_text


def _content(text: str) -> Counter:
    return Counter(char for char in text if not char.isspace())


def maybe_report_sorting(
    source_code: "SourceCode",
    sorted_text: str,
    start: int,
    end: int,
    rule: str = "",
) -> Edit | None:
    """
    Edit replacing `[start, end)` with `sorted_text`, or None if nothing changes.

    Raises:
        InvariantViolation: If the replacement is not a reordering of the original
    """
    original = source_code.text[start:end]
    if original == sorted_text:
        return None

    if _content(original) != _content(sorted_text):
        raise InvariantViolation(
            "Sorted text is not a reordering of the original",
            {"start": start, "end": end, "rule": rule},
        )

    return Edit(start=start, end=end, text=sorted_text, rule=rule)
