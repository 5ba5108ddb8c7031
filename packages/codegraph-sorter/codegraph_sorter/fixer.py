"""
Applying rule edits to text and files.

Both rules run on one parse; their edits never overlap because they cover
different statements. The fixed text is parsed and checked again until no edit
is produced, like a linter's multi-pass autofix.
"""

from dataclasses import dataclass, field
from pathlib import Path

from codegraph_sorter.common.exceptions import OverlappingEditsError
from codegraph_sorter.common.observability import get_logger
from codegraph_sorter.config import SorterSettings
from codegraph_sorter.models import Edit
from codegraph_sorter.parsing.source_code import SourceCode
from codegraph_sorter.parsing.source_file import SourceFile
from codegraph_sorter.rules.exports import sort_exports
from codegraph_sorter.rules.imports import sort_imports

logger = get_logger(__name__)


@dataclass
class SortResult:
    """
    Outcome of sorting one text.

    Attributes:
        file_path: File path used in reports
        original: Text before sorting
        text: Text after sorting
        edits: Edits applied in each pass
        passes: Number of passes that produced edits
    """

    file_path: str
    original: str
    text: str
    edits: list[Edit] = field(default_factory=list)
    passes: int = 0

    @property
    def changed(self) -> bool:
        return self.text != self.original


def compute_edits(source_code: SourceCode, settings: SorterSettings) -> list[Edit]:
    """
    Run both rules on a parsed file.

    Returns:
        Edits ordered by start offset
    """
    statements = source_code.statements
    edits = sort_imports(statements, source_code, settings.import_options())
    edits += sort_exports(statements, source_code, settings.export_options())
    return sorted(edits, key=lambda edit: edit.start)


def apply_edits(text: str, edits: list[Edit]) -> str:
    """
    Apply non-overlapping edits.

    Args:
        text: Original text
        edits: Edits against `text`

    Returns:
        Edited text

    Raises:
        OverlappingEditsError: If two edits touch the same range
    """
    ordered = sorted(edits, key=lambda edit: edit.start)
    for previous, edit in zip(ordered, ordered[1:]):
        if edit.start < previous.end:
            raise OverlappingEditsError(
                "Edits overlap",
                {"first": (previous.start, previous.end), "second": (edit.start, edit.end)},
            )

    for edit in reversed(ordered):
        text = text[: edit.start] + edit.text + text[edit.end :]
    return text


def sort_source(source: SourceFile, settings: SorterSettings | None = None) -> SortResult:
    """
    Sort imports and exports of a source file until stable.

    Args:
        source: Source file (content already loaded)
        settings: Sorter settings (defaults when None)

    Returns:
        SortResult

    Raises:
        SorterError: If the file does not parse or an engine invariant fails;
            no partial result is returned in that case
    """
    settings = settings or SorterSettings()
    result = SortResult(file_path=source.file_path, original=source.content, text=source.content)

    current = source
    for _ in range(settings.max_passes):
        source_code = SourceCode.parse(current)
        edits = compute_edits(source_code, settings)
        if not edits:
            break

        result.text = apply_edits(current.content, edits)
        result.edits.extend(edits)
        result.passes += 1
        current = SourceFile.from_content(current.file_path, result.text, current.language, current.encoding)
    else:
        logger.warning("max_passes_reached", file=source.file_path, passes=settings.max_passes)

    logger.debug("source_sorted", file=source.file_path, passes=result.passes, edits=len(result.edits))
    return result


def sort_text(text: str, language: str = "typescript", settings: SorterSettings | None = None) -> str:
    """Sort a string and return the new text"""
    return sort_source(SourceFile.from_content("<text>", text, language), settings).text


def sort_file(path: str | Path, settings: SorterSettings | None = None, write: bool = False) -> SortResult:
    """
    Sort one file.

    Args:
        path: File to sort
        settings: Sorter settings
        write: Write the result back when it changed

    Returns:
        SortResult
    """
    source = SourceFile.from_file(path)
    result = sort_source(source, settings)

    if write and result.changed:
        source.write(result.text)
        logger.info("file_fixed", file=str(path), edits=len(result.edits))

    return result
