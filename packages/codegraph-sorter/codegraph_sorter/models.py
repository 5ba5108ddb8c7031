"""
Sorter data model.

Everything here is produced per file and never mutated after construction,
except the specifier/item accumulators used while scanning token streams.
"""

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(str, Enum):
    """Lexical category of a token"""

    IDENTIFIER = "Identifier"
    KEYWORD = "Keyword"
    PUNCTUATOR = "Punctuator"
    STRING = "String"
    NUMERIC = "Numeric"
    TEMPLATE = "Template"
    REGEX = "RegularExpression"
    LINE_COMMENT = "Line"
    BLOCK_COMMENT = "Block"
    SPACES = "Spaces"
    NEWLINE = "Newline"


COMMENT_KINDS = frozenset([TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT])
WHITESPACE_KINDS = frozenset([TokenKind.SPACES, TokenKind.NEWLINE])


@dataclass(frozen=True, slots=True)
class Token:
    """
    A piece of source text.

    Whitespace tokens are synthesized from the gaps between parsed tokens and
    carry start/end of -1 and line 0.

    Attributes:
        kind: Token category
        text: Exact source text
        start: Start offset (characters, inclusive)
        end: End offset (characters, exclusive)
        start_line: First line (1-indexed)
        end_line: Last line (1-indexed)
    """

    kind: TokenKind
    text: str
    start: int = -1
    end: int = -1
    start_line: int = 0
    end_line: int = 0

    @property
    def is_comment(self) -> bool:
        return self.kind in COMMENT_KINDS

    @property
    def is_whitespace(self) -> bool:
        return self.kind in WHITESPACE_KINDS

    def is_punctuator(self, value: str) -> bool:
        return self.kind == TokenKind.PUNCTUATOR and self.text == value


class StatementKind(str, Enum):
    """Top-level statement discriminator"""

    IMPORT = "import"  # import ... from "x" / import "x"
    IMPORT_EQUALS = "import_equals"  # import x = require("x")
    EXPORT_FROM = "export_from"  # export {a} from "x"
    EXPORT_ALL = "export_all"  # export * from "x" / export * as ns from "x"
    EXPORT_NAMED = "export_named"  # export {a}
    EXPORT_DECLARATION = "export_declaration"  # export const a = 1
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Binding:
    """
    One entry of a `{...}` binding list.

    Attributes:
        name: External interface name (`a` in `import {a as b}`, `b` in `export {a as b}`)
        local: File-local name
        kind: "type", "typeof" or "value"
    """

    name: str
    local: str
    kind: str = "value"


@dataclass(frozen=True, slots=True)
class Statement:
    """
    Top-level statement of a parsed file.

    Range and lines cover the statement's own tokens only. Comments that the
    parser happens to nest at either edge are not part of it.
    """

    kind: StatementKind
    start: int
    end: int
    start_line: int
    end_line: int
    source: str | None = None
    module_kind: str = "value"
    bindings: tuple[Binding, ...] = ()
    has_clause: bool = False

    @property
    def is_import(self) -> bool:
        return self.kind == StatementKind.IMPORT

    @property
    def is_export_from(self) -> bool:
        return self.kind in (StatementKind.EXPORT_FROM, StatementKind.EXPORT_ALL)


class ChunkPlacement(str, Enum):
    """Result of classifying a statement while extracting chunks"""

    PART_OF_CHUNK = "PartOfChunk"
    PART_OF_NEW_CHUNK = "PartOfNewChunk"
    NOT_PART_OF_CHUNK = "NotPartOfChunk"


class SortBy(str, Enum):
    """Comparator used inside a group"""

    NAME = "name"
    PATH = "path"


@dataclass(frozen=True, slots=True)
class ItemSource:
    """
    Sort key material of one declaration.

    Attributes:
        key: Normalized path (punctuation permuted, see engine.source_key)
        original: Module path as written
        kind: "type", "typeof" or "value"
    """

    key: str
    original: str
    kind: str


@dataclass(frozen=True, slots=True)
class Item:
    """
    One declaration with its attached comments and whitespace.

    `code` is what gets printed for it, `[start, end)` the text it replaces.
    """

    statement: Statement
    code: str
    start: int
    end: int
    source: ItemSource
    is_side_effect: bool
    index: int
    needs_newline: bool = False


class SpecifierState(str, Enum):
    """Scanner state while splitting a `{...}` list into specifier items"""

    BEFORE = "before"
    SPECIFIER = "specifier"
    AFTER = "after"


@dataclass(slots=True)
class SpecifierItem:
    """Accumulator for one binding of a `{...}` list and its trivia"""

    before: list[Token] = field(default_factory=list)
    specifier: list[Token] = field(default_factory=list)
    after: list[Token] = field(default_factory=list)
    had_comma: bool = False
    state: SpecifierState = SpecifierState.BEFORE


@dataclass(slots=True)
class SpecifierList:
    """A `{...}` list split into leading trivia, items and trailing trivia"""

    before: list[Token] = field(default_factory=list)
    items: list[SpecifierItem] = field(default_factory=list)
    after: list[Token] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace `[start, end)` of the original text with `text`"""

    start: int
    end: int
    text: str
    rule: str = ""
