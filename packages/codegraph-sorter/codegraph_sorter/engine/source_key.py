"""
Module path normalization for path-based sorting.

Sort by directory level rather than by string length: after normalization a
plain collating comparison puts `../../` before `../` before `../a` before `./`
and relative paths before deeper or unrelated ones.
"""

import re

from codegraph_sorter.common.exceptions import UnsupportedPunctuationError
from codegraph_sorter.models import ItemSource, Statement

# `.`, `..`, `../..` -> `./`, `../`, `../../`
_RELATIVE_DIRECTORY = re.compile(r"^[./]*\.\Z")

# `../` sorts after `../../` but before `../a`; `,` collates between `/` and `_`
_DIRECTORY_ONLY = re.compile(r"^[./]*/\Z")

_PUNCTUATION = re.compile(r"[./_-]")

# Collation order `_ - , . /` becomes `. / , _ -`
PUNCTUATION_REPLACEMENTS = {".": "_", "/": "-", "_": ".", "-": "/"}


def _replace_punctuation(match: re.Match) -> str:
    char = match.group(0)
    try:
        return PUNCTUATION_REPLACEMENTS[char]
    except KeyError:
        raise UnsupportedPunctuationError(f"Unsupported punctuation character: {char}") from None


def normalize_source(value: str) -> str:
    """
    Build the sort key of a module path.

    Args:
        value: Module path as written (`./a`, `react`, `../`)

    Returns:
        Key to compare with the collator
    """
    value = _RELATIVE_DIRECTORY.sub(r"\g<0>/", value)
    value = _DIRECTORY_ONLY.sub(r"\g<0>,", value)
    return _PUNCTUATION.sub(_replace_punctuation, value)


def get_item_source(statement: Statement) -> ItemSource:
    original = statement.source or ""
    return ItemSource(key=normalize_source(original), original=original, kind=statement.module_kind)
