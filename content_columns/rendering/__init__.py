"""Cell rendering module."""

from content_columns.rendering.collaborators import (
    AttributeStore,
    FieldProvider,
    ImageResolver,
)
from content_columns.rendering.renderer import CellRenderer

__all__ = [
    "AttributeStore",
    "CellRenderer",
    "FieldProvider",
    "ImageResolver",
]
