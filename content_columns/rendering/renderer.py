"""Cell renderer - produces the output of one column for one row.

Dispatches on the column type:
- thumbnail: row's featured image as a sized <img>, nothing if it has none
- attribute: direct attribute store read
- external-field: external field provider read
- image: attribute holding an attachment id, rendered as a sized <img>;
  falls back to the raw attribute value when it is not a resolvable id
- computed: no lookup, the transform produces the value

After lookup, a callable transform replaces the value with
transform(value, row_id). Thumbnails and resolved images skip the transform.
Values are read on every call; nothing is cached per row.
"""

import logging
from typing import Any, Callable, Optional

from content_columns.columns.registry import ColumnRegistry
from content_columns.columns.schemas import (
    AnyColumn,
    ColumnType,
    ImageColumn,
    ThumbnailColumn,
)
from content_columns.rendering.collaborators import (
    AttributeStore,
    FieldProvider,
    ImageResolver,
)
from content_columns.rendering.markup import sized_image_markup, thumbnail_markup

logger = logging.getLogger(__name__)


def as_attachment_id(value: Any) -> Optional[int]:
    """Numeric attribute values are attachment ids."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            pass
    if isinstance(value, (str, float)):
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            return None
    return None


class _Resolved:
    """Final output that must not go through the transform."""

    __slots__ = ("output",)

    def __init__(self, output: str):
        self.output = output


class CellRenderer:
    """Renders registered columns; unregistered keys render nothing."""

    def __init__(
        self,
        registry: ColumnRegistry,
        attributes: Optional[AttributeStore] = None,
        fields: Optional[FieldProvider] = None,
        images: Optional[ImageResolver] = None,
    ):
        self.registry = registry
        self.attributes = attributes
        self.fields = fields
        self.images = images
        self._handlers: dict[ColumnType, Callable[[AnyColumn, Any], Any]] = {
            ColumnType.ATTRIBUTE: self._attribute_value,
            ColumnType.EXTERNAL_FIELD: self._field_value,
            ColumnType.IMAGE: self._image_value,
            ColumnType.COMPUTED: self._computed_value,
        }

    def render(self, column_key: str, row_id: Any) -> Optional[Any]:
        """Output for column_key on row_id, None to defer to other renderers."""
        column = self.registry.get_active(column_key)
        if column is None:
            return None

        if isinstance(column, ThumbnailColumn):
            return self._thumbnail(column, row_id)

        value = self._handlers[column.type](column, row_id)
        if isinstance(value, _Resolved):
            return value.output

        if column.transform is not None:
            if callable(column.transform):
                value = column.transform(value, row_id)
            else:
                logger.warning(f"Transform for column '{column_key}' is not callable, ignoring")

        return value

    # ── Type handlers ─────────────────────────────────────

    def _thumbnail(self, column: ThumbnailColumn, row_id: Any) -> Optional[str]:
        if self.images is None:
            return None
        src = self.images.thumbnail_url(row_id, column.image_size)
        if not src:
            return None
        return thumbnail_markup(src, column.width, column.height)

    def _attribute_value(self, column: AnyColumn, row_id: Any) -> Any:
        if self.attributes is None:
            return ""
        return self.attributes.get(row_id, column.key)

    def _field_value(self, column: AnyColumn, row_id: Any) -> Any:
        if self.fields is None:
            return ""
        return self.fields.get(row_id, column.key)

    def _image_value(self, column: ImageColumn, row_id: Any) -> Any:
        value = self._attribute_value(column, row_id)

        attachment_id = as_attachment_id(value)
        if attachment_id is not None and self.images is not None:
            src = self.images.attachment_url(attachment_id, column.image_size)
            if src:
                return _Resolved(sized_image_markup(src, column.width, column.height))
            logger.debug(
                f"Attachment {attachment_id} for column '{column.key}' did not resolve, "
                f"rendering raw value"
            )

        return value

    def _computed_value(self, column: AnyColumn, row_id: Any) -> Any:
        return ""
