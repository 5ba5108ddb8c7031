"""
Parsing infrastructure (Tree-sitter)
"""

from .parser_registry import ParserRegistry, get_registry
from .source_code import SourceCode
from .source_file import SourceFile
from .statements import collect_statements

__all__ = [
    "ParserRegistry",
    "SourceCode",
    "SourceFile",
    "collect_statements",
    "get_registry",
]
