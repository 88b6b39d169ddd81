"""Value sources the cell renderer reads from.

The host application provides these; lookups are synchronous and a
missing value is returned as None (or an empty string), never raised.
"""

from typing import Any, Optional, Protocol


class AttributeStore(Protocol):
    """Single-value reads of row attributes."""

    def get(self, row_id: Any, key: str) -> Any:
        ...


class FieldProvider(Protocol):
    """Reads of fields managed by an external field plugin."""

    def get(self, row_id: Any, key: str) -> Any:
        ...


class ImageResolver(Protocol):
    """Image URL lookups."""

    def thumbnail_url(self, row_id: Any, size: str) -> Optional[str]:
        """URL of the row's featured image, None if it has none."""
        ...

    def attachment_url(self, attachment_id: int, size: str) -> Optional[str]:
        """URL of an attachment at the given size, None if it cannot be resolved."""
        ...
