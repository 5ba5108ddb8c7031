"""
Sorting of the `{...}` binding list inside one import/export declaration.

The tokens between `{` and `}` are split into one SpecifierItem per binding plus
the list's own leading and trailing trivia. Every whitespace run and comment
ends up in exactly one place, so printing the items in their original order
gives back the original text, and printing them sorted only moves bindings.
"""

from typing import TYPE_CHECKING, Callable, Sequence

from codegraph_sorter.common.exceptions import InvariantViolation
from codegraph_sorter.engine.collation import sort_key
from codegraph_sorter.engine.trivia import (
    COMMA,
    SPACE,
    ends_with_spaces,
    get_all_tokens,
    has_newline,
    newline_token,
    print_tokens,
)
from codegraph_sorter.models import (
    Binding,
    SpecifierItem,
    SpecifierList,
    SpecifierState,
    Statement,
    Token,
    TokenKind,
)

if TYPE_CHECKING:
    from codegraph_sorter.parsing.source_code import SourceCode

GetSpecifiers = Callable[[Statement], Sequence[Binding]]

# Tokens a binding can end with (`a`, `d as default`, `a as "b-c"`)
NAME_KINDS = frozenset([TokenKind.IDENTIFIER, TokenKind.KEYWORD, TokenKind.STRING])


def _is_multiline_block_comment(token: Token) -> bool:
    return token.kind == TokenKind.BLOCK_COMMENT and has_newline(token.text)


class _SpecifierScanner:
    """Single forward pass over the list tokens, one handler per state"""

    def __init__(self):
        self.result = SpecifierList()
        self.current = SpecifierItem()
        self._handlers = {
            SpecifierState.BEFORE: self._before,
            SpecifierState.SPECIFIER: self._specifier,
            SpecifierState.AFTER: self._after,
        }

    def feed(self, token: Token) -> None:
        handler = self._handlers.get(self.current.state)
        if handler is None:
            raise InvariantViolation(f"Unknown state: {self.current.state!r}")
        handler(token)

    def _start_item(self, state: SpecifierState = SpecifierState.BEFORE) -> None:
        self.current = SpecifierItem(state=state)

    def _close_item(self) -> None:
        self.result.items.append(self.current)

    def _claim_list_before(self) -> None:
        # Trivia up to the first newline or binding belongs to `{`, not the first binding
        if not self.result.before and not self.result.items:
            self.result.before = self.current.before
            self._start_item()

    def _before(self, token: Token) -> None:
        if token.kind == TokenKind.NEWLINE:
            self.current.before.append(token)
            self._claim_list_before()
        elif token.is_whitespace or token.is_comment:
            self.current.before.append(token)
        else:
            self._claim_list_before()
            self.current.state = SpecifierState.SPECIFIER
            self.current.specifier.append(token)

    def _specifier(self, token: Token) -> None:
        if token.is_punctuator(","):
            self.current.had_comma = True
            self.current.state = SpecifierState.AFTER
        else:
            # Everything up to the comma: `a`, `a as b`, `type a as b` and the trivia inside
            self.current.specifier.append(token)

    def _after(self, token: Token) -> None:
        # Only trivia on the same line as the binding belongs to it
        if token.kind == TokenKind.NEWLINE:
            self.current.after.append(token)
            self._close_item()
            self._start_item()
        elif token.kind in (TokenKind.SPACES, TokenKind.LINE_COMMENT):
            self.current.after.append(token)
        elif token.kind == TokenKind.BLOCK_COMMENT:
            if has_newline(token.text):
                self._close_item()
                self._start_item()
                self.current.before.append(token)
            else:
                self.current.after.append(token)
        else:
            self._close_item()
            self._start_item(SpecifierState.SPECIFIER)
            self.current.specifier.append(token)

    def finish(self) -> SpecifierList:
        current = self.current
        result = self.result

        if current.state == SpecifierState.BEFORE:
            # Trailing comma followed by trivia on the same line
            result.after = current.before

        elif current.state == SpecifierState.AFTER:
            if ends_with_spaces(current.after):
                result.after = [current.after.pop()]
            self._close_item()

        elif current.state == SpecifierState.SPECIFIER:
            self._split_last_specifier()

        else:
            raise InvariantViolation(f"Unknown state: {current.state!r}")

        return result

    def _split_last_specifier(self) -> None:
        """Last binding without trailing comma: move its trailing trivia out"""
        current = self.current
        last_name = max(
            (index for index, token in enumerate(current.specifier) if token.kind in NAME_KINDS),
            default=-1,
        )
        specifier = current.specifier[: last_name + 1]
        after = current.specifier[last_name + 1 :]

        # Up to and including the first newline stays with the binding
        newline_index = next((i + 1 for i, token in enumerate(after) if token.kind == TokenKind.NEWLINE), -1)
        # A multiline block comment and what follows go to the list
        comment_index = next((i for i, token in enumerate(after) if _is_multiline_block_comment(token)), -1)

        if newline_index >= 0 and comment_index >= 0:
            slice_index = min(newline_index, comment_index)
        elif newline_index >= 0:
            slice_index = newline_index
        elif comment_index >= 0:
            slice_index = comment_index
        elif ends_with_spaces(after):
            slice_index = len(after) - 1
        else:
            slice_index = -1

        current.specifier = specifier
        current.after = after if slice_index == -1 else after[:slice_index]
        self._close_item()
        self.result.after = [] if slice_index == -1 else after[slice_index:]


def get_specifier_items(tokens: list[Token]) -> SpecifierList:
    """
    Split the tokens strictly between `{` and `}`.

    Args:
        tokens: Code tokens, comments and whitespace tokens of the list body

    Returns:
        Leading trivia, one item per binding, trailing trivia
    """
    scanner = _SpecifierScanner()
    for token in tokens:
        scanner.feed(token)
    return scanner.finish()


def sort_specifier_items(items: list[SpecifierItem], bindings: Sequence[Binding]) -> list[SpecifierItem]:
    """
    Order bindings by external name, then local name, then kind (type first).

    Equal bindings keep their original order.
    """
    if len(items) != len(bindings):
        raise InvariantViolation(
            "Specifier count mismatch",
            {"items": len(items), "bindings": len(bindings)},
        )

    order = sorted(
        range(len(items)),
        key=lambda i: (
            sort_key(bindings[i].name),
            sort_key(bindings[i].local),
            sort_key(bindings[i].kind),
            i,
        ),
    )
    return [items[i] for i in order]


def _ends_with_newline(tokens: list[Token]) -> bool:
    return bool(tokens) and tokens[-1].kind == TokenKind.NEWLINE


def _is_plain(tokens: list[Token]) -> bool:
    return all(token.kind == TokenKind.SPACES for token in tokens)


def _split_comma_spacing(item: SpecifierItem) -> tuple[list[Token], list[Token]]:
    """Binding tokens and the spaces between the binding and its comma (`b ,`)"""
    if not item.had_comma:
        return item.specifier, []
    end = len(item.specifier)
    while end > 0 and item.specifier[end - 1].kind == TokenKind.SPACES:
        end -= 1
    return item.specifier[:end], item.specifier[end:]


def _needs_starting_newline(tokens: list[Token]) -> bool:
    """A line comment or one-line block comment would swallow code put before it"""
    first = next((token for token in tokens if token.kind != TokenKind.SPACES), None)
    if first is None:
        return False
    return first.kind == TokenKind.LINE_COMMENT or (
        first.kind == TokenKind.BLOCK_COMMENT and not has_newline(first.text)
    )


def print_with_sorted_specifiers(
    statement: Statement,
    source_code: "SourceCode",
    get_specifiers: GetSpecifiers,
) -> str:
    """
    Print a declaration with its `{...}` bindings sorted.

    Declarations without a list, or with a single binding, print unchanged.

    Args:
        statement: Import or export declaration
        source_code: Parsed source
        get_specifiers: Bindings of the list, in source order

    Returns:
        Declaration text
    """
    all_tokens = get_all_tokens(statement, source_code)

    open_index = next((i for i, token in enumerate(all_tokens) if token.is_punctuator("{")), -1)
    close_index = next((i for i, token in enumerate(all_tokens) if token.is_punctuator("}")), -1)
    bindings = get_specifiers(statement)

    if open_index == -1 or close_index == -1 or len(bindings) <= 1:
        return print_tokens(all_tokens)

    specifier_list = get_specifier_items(all_tokens[open_index + 1 : close_index])
    sorted_items = sort_specifier_items(specifier_list.items, bindings)
    newline = source_code.newline

    token_before_close = source_code.token_before(all_tokens[close_index].start, include_comments=False)
    has_trailing_comma = token_before_close is not None and token_before_close.is_punctuator(",")

    original_items = specifier_list.items
    original_last = original_items[-1]
    last_index = len(sorted_items) - 1

    printed: list[Token] = []
    previous_after: list[Token] | None = None
    for index, item in enumerate(sorted_items):
        is_last = index == last_index
        position = original_items[index]
        # Spaces around the comma belong to the position in the list, not the binding
        specifier, _ = _split_comma_spacing(item)
        _, comma_spacing = _split_comma_spacing(position)

        after = item.after
        if _is_plain(after) and _is_plain(position.after):
            after = position.after
        elif is_last and not has_trailing_comma and item.had_comma:
            # The new last binding lost its comma
            if all(token.is_whitespace for token in after):
                after = []
            else:
                # Keep the space before its own comment, drop the one before the next binding
                while after and after[-1].kind == TokenKind.SPACES:
                    after = after[:-1]
            if _ends_with_newline(original_last.after) and not _ends_with_newline(after):
                after = [*after, newline_token(newline)]
        elif not is_last and after and after[-1].kind == TokenKind.BLOCK_COMMENT:
            # A binding that was last now has another binding after its comment
            after = [*after, *(position.after if position.after and _is_plain(position.after) else [SPACE])]

        if (
            previous_after is not None
            and _needs_starting_newline(item.before)
            and not _ends_with_newline(previous_after)
        ):
            printed.append(newline_token(newline))

        if is_last and not has_trailing_comma:
            printed.extend([*item.before, *specifier, *after])
        else:
            printed.extend([*item.before, *specifier, *comma_spacing, COMMA, *after])
        previous_after = after

    trailing_newline = []
    if _needs_starting_newline(specifier_list.after) and not (printed and printed[-1].kind == TokenKind.NEWLINE):
        trailing_newline = [newline_token(newline)]

    return print_tokens(
        [
            *all_tokens[: open_index + 1],
            *specifier_list.before,
            *printed,
            *trailing_newline,
            *specifier_list.after,
            *all_tokens[close_index:],
        ]
    )
