"""List view projection and query rewriting module."""

from content_columns.listing.projection import sortable_columns, visible_columns
from content_columns.listing.query import (
    AttributeClause,
    AttributeFilter,
    ListingQuery,
    QueryFragment,
    RequestContext,
    SortDirection,
)
from content_columns.listing.search import SearchRewriter
from content_columns.listing.sort import SortRewriter
from content_columns.listing.table import ListTable

__all__ = [
    "AttributeClause",
    "AttributeFilter",
    "ListTable",
    "ListingQuery",
    "QueryFragment",
    "RequestContext",
    "SearchRewriter",
    "SortDirection",
    "SortRewriter",
    "sortable_columns",
    "visible_columns",
]
