"""
Trivia-preserving reorder engine.

Pipeline: extract_chunks -> build_items (+ print_with_sorted_specifiers)
-> GroupSet.classify -> sort_groups -> print_sorted_items -> maybe_report_sorting.
"""

from .chunks import extract_chunks
from .collation import compare, sort_key
from .grouping import GroupSet, group_key
from .items import build_items, handle_last_semicolon
from .render import maybe_report_sorting, print_sorted_items
from .sorting import sort_groups, sort_items
from .source_key import normalize_source
from .specifiers import get_specifier_items, print_with_sorted_specifiers, sort_specifier_items

__all__ = [
    "GroupSet",
    "build_items",
    "compare",
    "extract_chunks",
    "get_specifier_items",
    "group_key",
    "handle_last_semicolon",
    "maybe_report_sorting",
    "normalize_source",
    "print_sorted_items",
    "print_with_sorted_specifiers",
    "sort_groups",
    "sort_items",
    "sort_key",
    "sort_specifier_items",
]
