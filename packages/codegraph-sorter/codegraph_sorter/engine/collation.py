"""
Locale-aware string comparison.

Approximates the CLDR root collation at base strength with numeric ordering:
case and diacritics are ignored, digit runs compare by value, and characters
group as whitespace < punctuation/symbols < digits < letters. Punctuation
follows the CLDR order, which is what makes the module path normalization in
`source_key` meaningful. Equal keys fall back to a code point comparison so
the order is total.
"""

import unicodedata
from functools import lru_cache

# CLDR root order of the ASCII punctuation and symbols
PUNCTUATION_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"

_PUNCTUATION_RANK = {char: rank for rank, char in enumerate(PUNCTUATION_ORDER)}

_WHITESPACE, _PUNCTUATION, _DIGITS, _LETTER = range(4)


@lru_cache(maxsize=4096)
def collation_key(value: str) -> tuple:
    """
    Primary-strength collation key.

    Args:
        value: String to compare

    Returns:
        Tuple of (class, weight) pairs comparable with `<`
    """
    folded = "".join(
        char for char in unicodedata.normalize("NFKD", value) if not unicodedata.combining(char)
    ).casefold()

    key = []
    index = 0
    while index < len(folded):
        char = folded[index]
        if char.isdecimal():
            end = index
            while end < len(folded) and folded[end].isdecimal():
                end += 1
            key.append((_DIGITS, int(folded[index:end])))
            index = end
            continue

        if char.isspace():
            key.append((_WHITESPACE, ord(char)))
        elif char in _PUNCTUATION_RANK:
            key.append((_PUNCTUATION, _PUNCTUATION_RANK[char]))
        elif not char.isalnum():
            key.append((_PUNCTUATION, len(PUNCTUATION_ORDER) + ord(char)))
        else:
            key.append((_LETTER, char))
        index += 1

    return tuple(key)


def sort_key(value: str) -> tuple:
    """Key equivalent to `compare`: collation first, then code points"""
    return collation_key(value), value


def compare(a: str, b: str) -> int:
    """
    Three-way comparison.

    Returns:
        Negative, zero or positive like a classic comparator
    """
    key_a, key_b = sort_key(a), sort_key(b)
    return (key_a > key_b) - (key_a < key_b)
