"""
Group classification.

A GroupSet is an ordered list of groups, each an ordered list of regex
patterns. Every item goes to the pattern with the longest match against its
group key; on equal length the earlier pattern wins. Items matching nothing
go to an implicit catch-all group after the configured ones.
"""

import re
from typing import Sequence

from codegraph_sorter.common.exceptions import InvalidConfigurationError
from codegraph_sorter.models import Item

SIDE_EFFECT_MARKER = "\0"
TYPE_MARKER = "\0"

# groups -> pattern buckets -> items
SortedGroups = list[list[list[Item]]]


def group_key(item: Item) -> str:
    """
    String matched against the group patterns.

    Side-effect imports get a leading NUL and type-only declarations a
    trailing one, so patterns like `^\\u0000` or `\\u0000$` can select them.
    """
    original = item.source.original
    if item.is_side_effect:
        return SIDE_EFFECT_MARKER + original
    if item.source.kind != "value":
        return original + TYPE_MARKER
    return original


def compile_pattern(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidConfigurationError(f"Invalid group pattern: {pattern!r}", {"error": str(e)}) from e


class GroupSet:
    """
    Compiled group patterns of one configuration.

    Patterns are compiled once here and reused for every item and chunk
    classified with this instance.
    """

    def __init__(self, groups: Sequence[Sequence[str]]):
        self.groups = [list(group) for group in groups]
        self._compiled = [[compile_pattern(pattern) for pattern in group] for group in self.groups]

    def match(self, key: str) -> tuple[int, int] | None:
        """
        Find the pattern with the longest match.

        Args:
            key: Group key of an item

        Returns:
            (group index, pattern index) or None when nothing matches
        """
        best = None
        best_length = -1
        for group_index, group in enumerate(self._compiled):
            for pattern_index, pattern in enumerate(group):
                found = pattern.search(key)
                if found is not None and len(found.group(0)) > best_length:
                    best = (group_index, pattern_index)
                    best_length = len(found.group(0))
        return best

    def classify(self, items: list[Item]) -> SortedGroups:
        """
        Distribute items over the groups.

        Args:
            items: Items in original order

        Returns:
            Non-empty groups in configuration order, each a list of non-empty
            pattern buckets; the catch-all group comes last
        """
        buckets: SortedGroups = [[[] for _ in group] for group in self._compiled]
        rest: list[Item] = []

        for item in items:
            matched = self.match(group_key(item))
            if matched is None:
                rest.append(item)
            else:
                group_index, pattern_index = matched
                buckets[group_index][pattern_index].append(item)

        buckets.append([rest])
        return [[bucket for bucket in group if bucket] for group in buckets if any(group)]

    def __repr__(self) -> str:
        return f"GroupSet(groups={self.groups!r})"
