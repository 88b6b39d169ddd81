"""Listing query schemas and per-request state.

ListingQuery is the outgoing request to the backing store. The sort and
search rewriters change it in place before the host executes it.

RequestContext holds everything that lives for exactly one request: the
fragment filters registered while rewriting, the search label override
and the title-splice counter. Create one per incoming request and pass
it through prepare/rewrite calls; never share it between requests.
"""

from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class AttributeClause(BaseModel):
    """One attribute comparison, e.g. sku LIKE %AB12%."""

    key: str
    value: Any = None
    compare: str = Field(default="LIKE", description="'=', 'LIKE', 'IN', ...")


class AttributeFilter(BaseModel):
    """A set of attribute clauses joined by one relation."""

    relation: str = Field(default="OR", description="'AND' or 'OR'")
    clauses: list[AttributeClause] = Field(default_factory=list)


class ListingQuery(BaseModel):
    """Sort/search/filter intent for one content-type list view."""

    content_type: str = Field(..., description="Content type the query lists")
    is_primary: bool = Field(
        default=True,
        description="Whether this is the main list-view query (not a nested or secondary query)",
    )
    sort_key: Optional[str] = Field(
        default=None,
        description="Requested sort key; rewritten to a sort directive for attribute columns",
    )
    sort_direction: SortDirection = Field(default=SortDirection.ASC)
    attribute_key: Optional[str] = Field(
        default=None,
        description="Attribute compared when sorting by attribute value",
    )
    search_term: str = Field(default="", description="Free-text search term")
    attribute_filters: Optional[AttributeFilter] = None


class QueryFragment(BaseModel):
    """The JOIN/WHERE SQL the store generates for attribute filters."""

    join: str = ""
    where: str = ""


FragmentFilter = Callable[[QueryFragment], QueryFragment]


class RequestContext:
    """State scoped to a single list-view request."""

    def __init__(self, content_type: Optional[str] = None):
        # Content type of the list screen being served
        self.content_type = content_type
        self.search_label: Optional[str] = None
        self.title_splices = 0
        self._fragment_filters: list[FragmentFilter] = []

    def add_fragment_filter(self, fragment_filter: FragmentFilter) -> None:
        self._fragment_filters.append(fragment_filter)

    def filter_fragment(self, fragment: QueryFragment) -> QueryFragment:
        """Hook point called by the store each time it builds attribute SQL."""
        for fragment_filter in self._fragment_filters:
            fragment = fragment_filter(fragment)
        return fragment

    def displayed_search_term(self, current: str = "") -> str:
        """Hook point for the search label shown in the list UI."""
        if self.search_label is not None:
            return self.search_label
        return current

    def is_list_screen(self, query: ListingQuery, content_type: str) -> bool:
        """True when query is the primary list view for content_type."""
        if not query.is_primary:
            return False
        if query.content_type != content_type:
            return False
        return self.content_type is None or self.content_type == content_type
