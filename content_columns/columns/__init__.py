"""Column declaration registry module."""

from content_columns.columns.registry import (
    ColumnCatalog,
    ColumnRegistry,
    ConfigurationError,
    get_column_catalog,
)
from content_columns.columns.schemas import (
    REMOVED,
    AttributeColumn,
    ColumnSummary,
    ColumnType,
    ComputedColumn,
    ExternalFieldColumn,
    ImageColumn,
    Removed,
    ThumbnailColumn,
)

__all__ = [
    "AttributeColumn",
    "ColumnCatalog",
    "ColumnRegistry",
    "ColumnSummary",
    "ColumnType",
    "ComputedColumn",
    "ConfigurationError",
    "ExternalFieldColumn",
    "ImageColumn",
    "REMOVED",
    "Removed",
    "ThumbnailColumn",
    "get_column_catalog",
]
