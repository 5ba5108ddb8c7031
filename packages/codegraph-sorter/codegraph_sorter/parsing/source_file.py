"""
Source File representation
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class SourceFile:
    """
    Represents a JavaScript/TypeScript source file.

    Attributes:
        file_path: Path as given by the caller
        content: File content as string
        language: Parser language (javascript, typescript, tsx)
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Line endings are kept as they are on disk.

        Args:
            file_path: Path to file
            language: Language override (auto-detected if None)
            encoding: File encoding

        Returns:
            SourceFile instance

        Raises:
            ValueError: If the language cannot be detected
        """
        file_path = Path(file_path)

        with file_path.open("r", encoding=encoding, newline="") as f:
            content = f.read()

        if language is None:
            from .parser_registry import get_registry

            language = get_registry().detect_language(file_path)
            if language is None:
                raise ValueError(f"Could not detect language for: {file_path}")

        return cls(
            file_path=str(file_path),
            content=content,
            language=language,
            encoding=encoding,
        )

    @classmethod
    def from_content(
        cls,
        file_path: str,
        content: str,
        language: str,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Create source file from content string.

        Args:
            file_path: File path used in reports
            content: Source code content
            language: Parser language
            encoding: File encoding

        Returns:
            SourceFile instance
        """
        return cls(
            file_path=file_path,
            content=content,
            language=language,
            encoding=encoding,
        )

    def write(self, content: str) -> None:
        """Write new content back to `file_path` without translating line endings"""
        with Path(self.file_path).open("w", encoding=self.encoding, newline="") as f:
            f.write(content)
