"""
Sorter settings.

Environment variables use the CODEGRAPH_SORT_ prefix, list values are JSON:
    export CODEGRAPH_SORT_SORT_BY=name
    export CODEGRAPH_SORT_IMPORT_GROUPS='[["^react"], ["^@?\\\\w"], ["^\\\\."]]'

A YAML file with the same keys can be loaded with SorterSettings.from_yaml().
"""

import copy
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from codegraph_sorter.common.exceptions import InvalidConfigurationError
from codegraph_sorter.defaults import DEFAULT_EXPORT_GROUPS, DEFAULT_IMPORT_GROUPS
from codegraph_sorter.engine.grouping import GroupSet, compile_pattern
from codegraph_sorter.models import SortBy
from codegraph_sorter.parsing.parser_registry import EXTENSION_LANGUAGES


def _check_patterns(groups: list[list[str]]) -> list[list[str]]:
    for group in groups:
        for pattern in group:
            try:
                compile_pattern(pattern)
            except InvalidConfigurationError as e:
                raise ValueError(str(e)) from e
    return groups


class SortOptions(BaseModel):
    """
    Configuration of one rule invocation.

    Attributes:
        groups: Ordered groups of regex patterns
        sort_by: Comparator inside a group
    """

    model_config = ConfigDict(frozen=True)

    groups: list[list[str]]
    sort_by: SortBy = SortBy.PATH

    @field_validator("groups")
    @classmethod
    def _validate_groups(cls, value: list[list[str]]) -> list[list[str]]:
        return _check_patterns(value)

    def group_set(self) -> GroupSet:
        """Compile the patterns (once per rule invocation)"""
        return GroupSet(self.groups)


class SorterSettings(BaseSettings):
    """
    Codegraph Sorter Settings

    Environment variables should use CODEGRAPH_SORT_ prefix.
    Example: CODEGRAPH_SORT_SORT_BY, CODEGRAPH_SORT_MAX_PASSES
    """

    model_config = SettingsConfigDict(
        env_prefix="CODEGRAPH_SORT_",
        extra="ignore",
    )

    # ========================================================================
    # Sorting
    # ========================================================================

    import_groups: list[list[str]] = Field(default_factory=lambda: copy.deepcopy(DEFAULT_IMPORT_GROUPS))
    export_groups: list[list[str]] = Field(default_factory=lambda: copy.deepcopy(DEFAULT_EXPORT_GROUPS))
    sort_by: SortBy = SortBy.PATH

    # Fix passes per file (edits are re-computed on the fixed text)
    max_passes: int = Field(default=10, ge=1)

    # ========================================================================
    # Files
    # ========================================================================

    extensions: list[str] = Field(default_factory=lambda: sorted(EXTENSION_LANGUAGES))
    exclude_dirs: list[str] = Field(default_factory=lambda: ["node_modules"])

    # ========================================================================
    # Observability
    # ========================================================================

    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

    @field_validator("import_groups", "export_groups")
    @classmethod
    def _validate_groups(cls, value: list[list[str]]) -> list[list[str]]:
        return _check_patterns(value)

    def import_options(self) -> SortOptions:
        return SortOptions(groups=self.import_groups, sort_by=self.sort_by)

    def export_options(self) -> SortOptions:
        return SortOptions(groups=self.export_groups, sort_by=self.sort_by)

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "SorterSettings":
        """
        Load settings from a YAML file.

        Args:
            path: YAML file with settings keys at the top level
            **overrides: Values taking precedence over the file (None is ignored)

        Returns:
            SorterSettings instance

        Raises:
            InvalidConfigurationError: If the file cannot be read or validated
        """
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigurationError(f"Cannot load config file: {path}", {"error": str(e)}) from e

        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Config file must contain a mapping: {path}")

        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.create(**data)

    @classmethod
    def create(cls, **values: Any) -> "SorterSettings":
        """Build settings, reporting validation errors as InvalidConfigurationError"""
        try:
            return cls(**values)
        except ValidationError as e:
            raise InvalidConfigurationError("Invalid sorter settings", {"errors": e.errors(include_url=False)}) from e
