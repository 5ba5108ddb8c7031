"""
Shared fixtures for sorter tests.
"""

import pytest
import structlog

from codegraph_sorter.parsing.source_code import SourceCode


@pytest.fixture
def parse():
    """Parse a TypeScript snippet"""

    def _parse(text: str, language: str = "typescript") -> SourceCode:
        return SourceCode.from_text(text, language)

    return _parse


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() calls, their handlers point at captured streams"""
    yield
    structlog.reset_defaults()
