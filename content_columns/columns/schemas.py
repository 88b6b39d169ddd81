"""Column declaration schemas - how one list column is sourced and shown.

A column declaration says: this key -> this value source -> this title,
sortable or not, searchable or not, optionally transformed. Each column
type is its own model carrying only the fields that type uses; the
registry picks the variant from the declared ``type``.

Declarations can also be switched off entirely with the REMOVED marker,
which hides the key from both the visible and the sortable column sets.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ColumnType(str, Enum):
    """Where a column's value comes from."""

    ATTRIBUTE = "attribute"            # Loosely-typed key/value fact on the row
    COMPUTED = "computed"              # No stored value, produced by transform
    EXTERNAL_FIELD = "external-field"  # Value from an external field provider
    IMAGE = "image"                    # Attribute holding an attachment id
    THUMBNAIL = "thumbnail"            # The row's featured image


# Type names used by older declarations
TYPE_ALIASES: dict[str, str] = {
    "meta": ColumnType.ATTRIBUTE.value,
    "acf": ColumnType.EXTERNAL_FIELD.value,
}

THUMBNAIL_KEY = "thumbnail"


class Removed:
    """Marker for a column that was switched off in the declarations."""

    _instance: Optional["Removed"] = None

    def __new__(cls) -> "Removed":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REMOVED"

    def __bool__(self) -> bool:
        return False


REMOVED = Removed()


class ColumnSpec(BaseModel):
    """Fields shared by every column type."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Column key, unique within a content type")
    title: str = Field(default="", description="Column header shown in the list")
    type: ColumnType = Field(default=ColumnType.ATTRIBUTE)
    transform: Optional[Any] = Field(
        default=None,
        description="Callable (value, row_id) -> renderable applied after lookup",
    )
    sortable: bool = Field(default=False)
    orderable_key: str = Field(
        default="attribute_value",
        description="Sort directive used when sorting by this column "
        "(e.g. 'attribute_value', 'attribute_value_num')",
    )
    searchable: bool = Field(default=False)


class AttributeColumn(ColumnSpec):
    """Value read directly from the attribute store."""

    type: ColumnType = ColumnType.ATTRIBUTE


class ComputedColumn(ColumnSpec):
    """Column with no stored value; its transform produces the output."""

    type: ColumnType = ColumnType.COMPUTED


class ExternalFieldColumn(ColumnSpec):
    """Value read through the external field provider."""

    type: ColumnType = ColumnType.EXTERNAL_FIELD


class ImageColumn(ColumnSpec):
    """Attribute holding an attachment id, rendered as a sized image."""

    type: ColumnType = ColumnType.IMAGE
    width: Optional[int] = None
    height: Optional[int] = None
    image_size: str = "thumbnail"


class ThumbnailColumn(ColumnSpec):
    """The row's featured image."""

    type: ColumnType = ColumnType.THUMBNAIL
    width: Optional[int] = None
    height: Optional[int] = None
    image_size: str = "thumbnail"


COLUMN_VARIANTS: dict[ColumnType, type[ColumnSpec]] = {
    ColumnType.ATTRIBUTE: AttributeColumn,
    ColumnType.COMPUTED: ComputedColumn,
    ColumnType.EXTERNAL_FIELD: ExternalFieldColumn,
    ColumnType.IMAGE: ImageColumn,
    ColumnType.THUMBNAIL: ThumbnailColumn,
}

AnyColumn = Union[
    AttributeColumn,
    ComputedColumn,
    ExternalFieldColumn,
    ImageColumn,
    ThumbnailColumn,
]

ColumnEntry = Union[AnyColumn, Removed]


class ColumnSummary(BaseModel):
    """Lightweight summary for listing endpoints."""

    key: str
    title: str = ""
    type: Optional[ColumnType] = None
    removed: bool = False
    sortable: bool = False
    orderable_key: Optional[str] = None
    searchable: bool = False
    has_transform: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    image_size: Optional[str] = None


class ContentTypeSummary(BaseModel):
    """One content type known to the catalog."""

    content_type: str
    column_count: int = 0
    removed_count: int = 0
    sortable: list[str] = Field(default_factory=list)
    searchable: list[str] = Field(default_factory=list)
