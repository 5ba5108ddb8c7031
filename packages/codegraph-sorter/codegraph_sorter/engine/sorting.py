"""
Ordering of items inside one pattern bucket.
"""

from codegraph_sorter.engine.collation import sort_key
from codegraph_sorter.engine.grouping import SortedGroups
from codegraph_sorter.models import Item, SortBy


def item_sort_key(item: Item, sort_by: SortBy) -> tuple:
    """
    Total order of items.

    Side-effect items come first in their original order. The rest compare by
    printed code (`name`), or by normalized path, raw path, kind (`type`
    before `value`) (`path`). The original index breaks every remaining tie.
    """
    if item.is_side_effect:
        return (0, item.index)

    if sort_by == SortBy.NAME:
        return (1, sort_key(item.code), item.index)

    return (
        1,
        sort_key(item.source.key),
        sort_key(item.source.original),
        sort_key(item.source.kind),
        item.index,
    )


def sort_items(items: list[Item], sort_by: SortBy) -> list[Item]:
    return sorted(items, key=lambda item: item_sort_key(item, sort_by))


def sort_groups(groups: SortedGroups, sort_by: SortBy) -> SortedGroups:
    return [[sort_items(bucket, sort_by) for bucket in group] for group in groups]
