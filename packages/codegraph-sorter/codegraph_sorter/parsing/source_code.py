"""
Token and source-text service over a Tree-sitter tree.

Flattens the tree into one ordered token list (comments included) and answers
the questions the sort engine asks: which tokens a range covers, which comments
sit directly before or after an offset, what the neighbouring token is.
All offsets are character offsets into `text`.
"""

import re
from bisect import bisect_left

try:
    from tree_sitter import Node as TSNode
    from tree_sitter import Tree as TSTree
except ImportError as e:
    raise ImportError("tree-sitter is required. Install with: pip install tree-sitter") from e

from codegraph_sorter.common.exceptions import ParseError
from codegraph_sorter.models import Statement, Token, TokenKind
from codegraph_sorter.parsing.parser_registry import get_registry
from codegraph_sorter.parsing.source_file import SourceFile

# Nodes printed as a single token even though Tree-sitter gives them children
ATOMIC_NODE_TYPES = frozenset(["string", "template_string", "regex", "comment", "html_comment", "hash_bang_line"])

COMMENT_NODE_TYPES = frozenset(["comment", "html_comment", "hash_bang_line"])

NEWLINE = re.compile(r"(\r?\n)")

_WORD = re.compile(r"^[A-Za-z_$][\w$]*$")


class SourceCode:
    """
    Parsed file plus its token stream.

    Thread-Safety: Safe for reads (immutable after construction)
    """

    def __init__(self, source: SourceFile, tree: TSTree):
        """
        Initialize source code.

        Args:
            source: Source file
            tree: Tree-sitter tree parsed from `source.content`
        """
        self.source = source
        self.text = source.content
        self.tree = tree
        self._char_offsets = _char_offset_table(self.text)
        self.tokens = self._collect_tokens()
        self._starts = [token.start for token in self.tokens]
        self._statements: list[Statement] | None = None

    @classmethod
    def parse(cls, source: SourceFile) -> "SourceCode":
        """
        Parse source file.

        Args:
            source: Source file to parse

        Returns:
            SourceCode instance

        Raises:
            ValueError: If language not supported
            ParseError: If the file has syntax errors
        """
        parser = get_registry().get_parser(source.language)
        if parser is None:
            raise ValueError(f"Language not supported: {source.language}")

        tree = parser.parse(source.content.encode("utf-8"))
        if tree is None:
            raise ParseError(f"Failed to parse file: {source.file_path}")

        errors = _find_errors(tree.root_node)
        if errors:
            first = errors[0]
            raise ParseError(
                f"Syntax error in {source.file_path}",
                {"line": first.start_point[0] + 1, "column": first.start_point[1], "errors": len(errors)},
            )

        return cls(source, tree)

    @classmethod
    def from_text(cls, text: str, language: str = "typescript", file_path: str = "<text>") -> "SourceCode":
        """Parse a string directly"""
        return cls.parse(SourceFile.from_content(file_path, text, language))

    @property
    def statements(self) -> list[Statement]:
        """Top-level statements in source order"""
        if self._statements is None:
            from codegraph_sorter.parsing.statements import collect_statements

            self._statements = collect_statements(self)
        return self._statements

    @property
    def newline(self) -> str:
        """Line break used by the file (first one found, `\\n` if none)"""
        match = NEWLINE.search(self.text)
        return "\n" if match is None else match.group(0)

    # ============================================================
    # Offsets
    # ============================================================

    def char_offset(self, byte_offset: int) -> int:
        """Convert a UTF-8 byte offset from Tree-sitter to a character offset"""
        if self._char_offsets is None:
            return byte_offset
        return self._char_offsets[byte_offset]

    def node_range(self, node: TSNode) -> tuple[int, int]:
        return self.char_offset(node.start_byte), self.char_offset(node.end_byte)

    def node_text(self, node: TSNode) -> str:
        start, end = self.node_range(node)
        return self.text[start:end]

    def get_text(self, start: int = 0, end: int | None = None) -> str:
        return self.text[start:end]

    # ============================================================
    # Token queries
    # ============================================================

    def get_tokens(self, start: int, end: int) -> list[Token]:
        """
        Code tokens (no comments) inside `[start, end)`.

        Args:
            start: Range start offset
            end: Range end offset

        Returns:
            Tokens in source order
        """
        index = bisect_left(self._starts, start)
        result = []
        while index < len(self.tokens) and self.tokens[index].end <= end:
            token = self.tokens[index]
            if not token.is_comment:
                result.append(token)
            index += 1
        return result

    def token_before(self, offset: int, include_comments: bool = True) -> Token | None:
        """Last token ending at or before `offset`"""
        index = bisect_left(self._starts, offset) - 1
        while index >= 0:
            token = self.tokens[index]
            if include_comments or not token.is_comment:
                return token
            index -= 1
        return None

    def token_after(self, offset: int, include_comments: bool = True) -> Token | None:
        """First token starting at or after `offset`"""
        index = bisect_left(self._starts, offset)
        while index < len(self.tokens):
            token = self.tokens[index]
            if include_comments or not token.is_comment:
                return token
            index += 1
        return None

    def comments_before(self, offset: int) -> list[Token]:
        """Run of comments directly before `offset` (only whitespace in between)"""
        index = bisect_left(self._starts, offset) - 1
        comments = []
        while index >= 0 and self.tokens[index].is_comment:
            comments.append(self.tokens[index])
            index -= 1
        comments.reverse()
        return comments

    def comments_after(self, offset: int) -> list[Token]:
        """Run of comments directly after `offset` (only whitespace in between)"""
        index = bisect_left(self._starts, offset)
        comments = []
        while index < len(self.tokens) and self.tokens[index].is_comment:
            comments.append(self.tokens[index])
            index += 1
        return comments

    # ============================================================
    # Construction
    # ============================================================

    def _collect_tokens(self) -> list[Token]:
        """Collect leaves (and atomic nodes) without recursion"""
        tokens = []
        stack = [self.tree.root_node]
        while stack:
            node = stack.pop()
            if node.child_count == 0 or node.type in ATOMIC_NODE_TYPES:
                # Zero-width leaves are inserted (missing) tokens
                if node.end_byte > node.start_byte:
                    tokens.append(self._make_token(node))
                continue
            stack.extend(reversed(node.children))

        tokens.sort(key=lambda token: token.start)
        return tokens

    def _make_token(self, node: TSNode) -> Token:
        start, end = self.node_range(node)
        text = self.text[start:end]
        return Token(
            kind=_token_kind(node, text),
            text=text,
            start=start,
            end=end,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
        )

    def __repr__(self) -> str:
        return f"SourceCode(file={self.source.file_path}, language={self.source.language})"


def _token_kind(node: TSNode, text: str) -> TokenKind:
    node_type = node.type
    if node_type in COMMENT_NODE_TYPES:
        if text.startswith("/*"):
            return TokenKind.BLOCK_COMMENT
        return TokenKind.LINE_COMMENT
    if node_type == "string":
        return TokenKind.STRING
    if node_type == "template_string":
        return TokenKind.TEMPLATE
    if node_type == "regex":
        return TokenKind.REGEX
    if node_type == "number":
        return TokenKind.NUMERIC
    if node.is_named and node_type.endswith("identifier"):
        return TokenKind.IDENTIFIER
    if _WORD.match(text):
        return TokenKind.KEYWORD
    return TokenKind.PUNCTUATOR


def _char_offset_table(text: str) -> list[int] | None:
    """Byte → character offset table, None when the text is pure ASCII"""
    data = text.encode("utf-8")
    if len(data) == len(text):
        return None

    table = [0] * (len(data) + 1)
    position = 0
    for index, char in enumerate(text):
        width = len(char.encode("utf-8"))
        for k in range(width):
            table[position + k] = index
        position += width
    table[position] = len(text)
    return table


def _find_errors(root: TSNode) -> list[TSNode]:
    """All ERROR and missing nodes, in document order"""
    errors = []
    if not root.has_error:
        return errors

    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return errors
