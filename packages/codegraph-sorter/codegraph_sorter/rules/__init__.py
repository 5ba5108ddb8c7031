"""
Rule entry points: statements + options in, edits out.
"""

from .exports import sort_exports
from .imports import sort_imports

__all__ = ["sort_exports", "sort_imports"]
