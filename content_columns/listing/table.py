"""ListTable - the column surface a host listing framework calls into.

One ListTable per content type, sharing a single ColumnRegistry:

    table = ListTable(registry, attributes=store, fields=acf, images=media)
    headers = table.columns(default_headers)
    sortable = table.sortable_columns(default_sortable)

    context = RequestContext(content_type="product")
    table.prepare_query(query, context)
    fragment = context.filter_fragment(fragment)   # called by the store
    cell = table.render("sku", row_id)
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from content_columns.columns.registry import ColumnRegistry
from content_columns.listing.projection import sortable_columns, visible_columns
from content_columns.listing.query import ListingQuery, RequestContext
from content_columns.listing.search import SearchRewriter
from content_columns.listing.sort import SortRewriter
from content_columns.rendering.collaborators import (
    AttributeStore,
    FieldProvider,
    ImageResolver,
)
from content_columns.rendering.renderer import CellRenderer

logger = logging.getLogger(__name__)


class ListTable:
    """Applies one content type's column registry to its list view."""

    def __init__(
        self,
        registry: ColumnRegistry,
        renderer: Optional[CellRenderer] = None,
        admin: bool = True,
        title_column: str = "title",
        attributes: Optional[AttributeStore] = None,
        fields: Optional[FieldProvider] = None,
        images: Optional[ImageResolver] = None,
    ):
        self.registry = registry
        if renderer is None:
            renderer = CellRenderer(registry, attributes=attributes, fields=fields, images=images)
        elif attributes is not None or fields is not None or images is not None:
            raise ValueError("Pass either a renderer or value sources, not both")
        self.renderer = renderer
        # Query rewriting only applies on admin screens
        self.admin = admin
        self.search_rewriter = SearchRewriter(registry, title_column=title_column)
        self.sort_rewriter = SortRewriter(registry)

    @property
    def content_type(self) -> str:
        return self.registry.content_type

    def columns(self, base: Mapping[str, str]) -> dict[str, str]:
        return visible_columns(self.registry, base)

    def sortable_columns(self, base: Mapping[str, str]) -> dict[str, str]:
        return sortable_columns(self.registry, base)

    def prepare_query(self, query: ListingQuery, context: RequestContext) -> ListingQuery:
        """Run the search then the sort rewriter on query, in place."""
        if not self.admin:
            return query

        searched = self.search_rewriter.rewrite(query, context)
        sorted_ = self.sort_rewriter.rewrite(query, context)
        if searched or sorted_:
            logger.debug(
                f"Prepared '{self.content_type}' query (search={searched}, sort={sorted_})"
            )
        return query

    def render(self, column_key: str, row_id: Any) -> Optional[Any]:
        return self.renderer.render(column_key, row_id)
