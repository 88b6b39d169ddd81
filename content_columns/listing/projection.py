"""List projection - which columns a list view shows and sorts by.

Both functions take the column set the host listing framework would
show by default and return a new mapping with the registry applied.
The base mapping is never modified.
"""

from collections.abc import Mapping

from content_columns.columns.registry import ColumnRegistry
from content_columns.columns.schemas import ColumnType, Removed


def visible_columns(registry: ColumnRegistry, base: Mapping[str, str]) -> dict[str, str]:
    """Apply the registry to the default key -> title mapping.

    Removed columns are dropped. Declared columns keep their position in
    base when present there, otherwise they are appended in registry order.
    """
    columns = dict(base)
    for key, column in registry.items():
        if isinstance(column, Removed):
            columns.pop(key, None)
            continue
        columns[key] = column.title
    return columns


def sortable_columns(registry: ColumnRegistry, base: Mapping[str, str]) -> dict[str, str]:
    """Apply the registry to the default key -> sort id mapping.

    Only attribute columns get sortability added here; other types must
    already be sortable in base.
    """
    columns = dict(base)
    for key, column in registry.items():
        if isinstance(column, Removed) or not column.sortable:
            columns.pop(key, None)
        elif key not in columns and column.type == ColumnType.ATTRIBUTE:
            columns[key] = key
    return columns
