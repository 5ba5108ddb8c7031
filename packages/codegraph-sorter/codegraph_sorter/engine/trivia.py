"""
Whitespace and comment handling shared by the item builder and the specifier sorter.
"""

import re
from typing import TYPE_CHECKING, Iterable

from codegraph_sorter.models import Statement, Token, TokenKind

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode

NEWLINE = re.compile(r"(\r?\n)")

COMMA = Token(TokenKind.PUNCTUATOR, ",")
SPACE = Token(TokenKind.SPACES, " ")


def has_newline(text: str) -> bool:
    return NEWLINE.search(text) is not None


def split_lines(text: str) -> list[str]:
    """Split on line breaks, keeping the breaks at odd indexes"""
    return NEWLINE.split(text)


def parse_whitespace(whitespace: str) -> list[Token]:
    """
    Turn a whitespace run into Spaces/Newline tokens.

    Runs with two or more blank lines keep only their first line break and
    the indentation of their last line.

    Args:
        whitespace: Text between two tokens

    Returns:
        Non-empty whitespace tokens
    """
    parts = split_lines(whitespace)
    if len(parts) >= 5:
        parts = parts[:2] + parts[-1:]

    return [
        Token(TokenKind.SPACES if index % 2 == 0 else TokenKind.NEWLINE, text)
        for index, text in enumerate(parts)
        if text != ""
    ]


def print_tokens(tokens: Iterable[Token]) -> str:
    return "".join(token.text for token in tokens)


def remove_blank_lines(whitespace: str) -> str:
    return print_tokens(parse_whitespace(whitespace))


def ends_with_spaces(tokens: list[Token]) -> bool:
    return bool(tokens) and tokens[-1].kind == TokenKind.SPACES


def newline_token(newline: str) -> Token:
    return Token(TokenKind.NEWLINE, newline)


def get_all_tokens(statement: Statement, source_code: "SourceCode") -> list[Token]:
    """
    Code tokens of a statement with the comments and whitespace between them.

    Concatenating the result reproduces the statement text, minus extra blank lines.
    """
    tokens = source_code.get_tokens(statement.start, statement.end)
    text = source_code.text
    result: list[Token] = []

    for index, token in enumerate(tokens):
        result.append(token)
        if index == len(tokens) - 1:
            break

        previous = token
        for comment in source_code.comments_after(token.end):
            result.extend(parse_whitespace(text[previous.end : comment.start]))
            result.append(comment)
            previous = comment
        result.extend(parse_whitespace(text[previous.end : tokens[index + 1].start]))

    return result
