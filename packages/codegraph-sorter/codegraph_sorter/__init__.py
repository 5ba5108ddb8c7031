"""
CodeGraph Sorter

Trivia-preserving import/export sorter for JavaScript, TypeScript and TSX.
Reorders runs of module declarations into configurable groups while keeping
every comment, blank line and semicolon where it belongs.
"""

__version__ = "0.1.0"

from .config import SortOptions, SorterSettings
from .fixer import SortResult, apply_edits, sort_file, sort_source, sort_text
from .models import Edit, SortBy
from .rules import sort_exports, sort_imports

__all__ = [
    "Edit",
    "SortBy",
    "SortOptions",
    "SortResult",
    "SorterSettings",
    "apply_edits",
    "sort_exports",
    "sort_file",
    "sort_imports",
    "sort_source",
    "sort_text",
]
