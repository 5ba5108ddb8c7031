"""
Item builder: one sortable, independently printable unit per declaration.

An item is a declaration plus the comments that belong to it and the
indentation/trailing spaces around them. Comments on the lines above a
declaration belong to it; comments after it on the same line belong to it;
multiline block comments always belong to what follows them.
"""

from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from codegraph_sorter.common.exceptions import InvariantViolation
from codegraph_sorter.engine.source_key import get_item_source
from codegraph_sorter.engine.specifiers import GetSpecifiers, print_with_sorted_specifiers
from codegraph_sorter.engine.trivia import remove_blank_lines, split_lines
from codegraph_sorter.models import Item, Statement, Token, TokenKind

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode

IsSideEffect = Callable[[Statement, "SourceCode"], bool]


def handle_last_semicolon(chunk: list[Statement], source_code: "SourceCode") -> list[Statement]:
    """
    Detach a semicolon that sits alone on the line after the last declaration.

        import a from "a"
        ;

    Moving that semicolon along with the declaration would leave it dangling
    somewhere inside the chunk, so the last statement is shrunk to end before it.
    A semicolon that ends the file stays attached.
    """
    last = chunk[-1]
    tokens = source_code.get_tokens(last.start, last.end)
    if len(tokens) < 2:
        return chunk

    next_to_last, last_token = tokens[-2], tokens[-1]
    if not last_token.is_punctuator(";"):
        return chunk

    belongs_to_statement = (
        next_to_last.end_line == last_token.start_line
        or source_code.token_after(last_token.end, include_comments=False) is None
    )
    if belongs_to_statement:
        return chunk

    return chunk[:-1] + [replace(last, end=next_to_last.end, end_line=next_to_last.end_line)]


def _check_chunk(chunk: list[Statement]) -> None:
    if not chunk:
        raise InvariantViolation("Cannot build items for an empty chunk")
    for previous, statement in zip(chunk, chunk[1:]):
        if statement.start < previous.end:
            raise InvariantViolation(
                "Chunk statements are not in source order",
                {"line": statement.start_line, "previous_line": previous.end_line},
            )


def _relevant_comments(
    statement: Statement,
    source_code: "SourceCode",
    index: int,
    last_line: int,
) -> tuple[list[Token], list[Token]]:
    """
    Comments attached before and after a declaration.

    Before: every comment directly above, except comments on the previous
    declaration's last line (they are its trailing comments) and, for the first
    declaration, comments not on its own line. A multiline block comment that
    starts on the previous line still ends after it, so it is kept.
    After: comments directly following on the same line.
    """
    before = [
        comment
        for comment in source_code.comments_before(statement.start)
        if comment.start_line <= statement.start_line
        and comment.end_line > last_line
        and (index > 0 or comment.start_line > last_line)
    ]
    after = [comment for comment in source_code.comments_after(statement.end) if comment.end_line == statement.end_line]
    return before, after


def _print_comments(
    statement: Statement,
    before: list[Token],
    after: list[Token],
    source_code: "SourceCode",
) -> tuple[str, str]:
    text = source_code.text

    printed_before = []
    for index, comment in enumerate(before):
        next_start = before[index + 1].start if index + 1 < len(before) else statement.start
        printed_before.append(comment.text + remove_blank_lines(text[comment.end : next_start]))

    printed_after = []
    for index, comment in enumerate(after):
        previous_end = after[index - 1].end if index > 0 else statement.end
        printed_after.append(remove_blank_lines(text[previous_end : comment.start]) + comment.text)

    return "".join(printed_before), "".join(printed_after)


def get_indentation(offset: int, source_code: "SourceCode") -> str:
    """Whitespace between the start of the line and `offset`, if nothing else is on that line"""
    token_before = source_code.token_before(offset, include_comments=True)

    if token_before is None:
        return split_lines(source_code.text[:offset])[-1]

    lines = split_lines(source_code.text[token_before.end : offset])
    return lines[-1] if len(lines) > 1 else ""


def get_trailing_spaces(offset: int, source_code: "SourceCode") -> str:
    """Whitespace between `offset` and the end of its line (or the next token)"""
    token_after = source_code.token_after(offset, include_comments=True)
    end = None if token_after is None else token_after.start
    return split_lines(source_code.text[offset:end])[0]


def build_items(
    chunk: list[Statement],
    source_code: "SourceCode",
    is_side_effect: IsSideEffect,
    get_specifiers: GetSpecifiers,
) -> list[Item]:
    """
    Build the items of a chunk.

    Args:
        chunk: Reorderable statements in source order
        source_code: Parsed source
        is_side_effect: Whether a declaration binds nothing (`import "x"`)
        get_specifiers: Bindings of a declaration's `{...}` list

    Returns:
        Items in original order

    Raises:
        InvariantViolation: If the chunk is empty or not in source order
    """
    _check_chunk(chunk)
    chunk = handle_last_semicolon(chunk, source_code)

    items = []
    for index, statement in enumerate(chunk):
        last_line = statement.start_line - 1 if index == 0 else chunk[index - 1].end_line

        comments_before, comments_after = _relevant_comments(statement, source_code, index, last_line)
        before, after = _print_comments(statement, comments_before, comments_after, source_code)

        # Indentation of the first line supports imports inside `<script>` blocks
        first_start = comments_before[0].start if comments_before else statement.start
        indentation = get_indentation(first_start, source_code)

        # Trailing spaces travel with the item instead of producing a sort error
        last_end = comments_after[-1].end if comments_after else statement.end
        trailing_spaces = get_trailing_spaces(last_end, source_code)

        code = (
            indentation
            + before
            + print_with_sorted_specifiers(statement, source_code, get_specifiers)
            + after
            + trailing_spaces
        )

        items.append(
            Item(
                statement=statement,
                code=code,
                start=first_start - len(indentation),
                end=last_end + len(trailing_spaces),
                source=get_item_source(statement),
                is_side_effect=is_side_effect(statement, source_code),
                index=index,
                needs_newline=bool(comments_after) and comments_after[-1].kind == TokenKind.LINE_COMMENT,
            )
        )

    return items
