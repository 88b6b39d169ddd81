"""Image markup for list cells. All interpolated values are escaped."""

from html import escape
from typing import Optional


def size_styles(width: Optional[int], height: Optional[int]) -> str:
    """CSS width/height declarations for the sizes that are set."""
    styles = ""
    for attr, value in (("width", width), ("height", height)):
        if value is not None:
            styles += f"{attr}:{escape(str(value), quote=True)}px;"
    return styles


def image_tag(src: str, styles: str = "") -> str:
    tag = f'<img src="{escape(src, quote=True)}"'
    if styles:
        tag += f' style="{escape(styles, quote=True)}"'
    return tag + ">"


def thumbnail_markup(src: str, width: Optional[int], height: Optional[int]) -> str:
    return image_tag(src, size_styles(width, height))


def sized_image_markup(src: str, width: Optional[int], height: Optional[int]) -> str:
    """Image that never overflows its cell."""
    if not src:
        return ""
    return image_tag(src, "max-width:100%;" + size_styles(width, height))
