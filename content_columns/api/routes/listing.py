"""API routes for list projection and query rewriting.

Lets a host that runs outside this process apply a content type's
columns to its default headers and rewrite its listing query.
Each request gets its own RequestContext.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from content_columns.api.routes.columns import get_registry_or_404
from content_columns.listing.query import ListingQuery, QueryFragment, RequestContext
from content_columns.listing.table import ListTable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listing", tags=["listing"])


class ColumnSetRequest(BaseModel):
    """Default columns contributed by the host's list view."""

    columns: dict[str, str] = Field(
        default_factory=dict,
        description="Ordered key -> title (or key -> sort id) mapping",
    )


class ColumnSetResponse(BaseModel):
    content_type: str
    columns: dict[str, str]


class QueryRewriteRequest(BaseModel):
    """Listing query to rewrite, plus the store's attribute SQL if already built."""

    query: ListingQuery
    fragment: Optional[QueryFragment] = Field(
        default=None,
        description="Attribute JOIN/WHERE the store generated; passed through the fragment hook",
    )


class QueryRewriteResponse(BaseModel):
    query: ListingQuery
    search_label: str = ""
    fragment: Optional[QueryFragment] = None


def _table(content_type: str) -> ListTable:
    return ListTable(get_registry_or_404(content_type))


@router.post("/{content_type}/visible", response_model=ColumnSetResponse)
async def visible(content_type: str, request: ColumnSetRequest):
    """Apply declared titles and removals to the default column set."""
    table = _table(content_type)
    return ColumnSetResponse(
        content_type=content_type,
        columns=table.columns(request.columns),
    )


@router.post("/{content_type}/sortable", response_model=ColumnSetResponse)
async def sortable(content_type: str, request: ColumnSetRequest):
    """Apply declared sortability to the default sortable set."""
    table = _table(content_type)
    return ColumnSetResponse(
        content_type=content_type,
        columns=table.sortable_columns(request.columns),
    )


@router.post("/{content_type}/query", response_model=QueryRewriteResponse)
async def rewrite_query(content_type: str, request: QueryRewriteRequest):
    """Rewrite sort and search of a listing query for this content type."""
    table = _table(content_type)
    # Queries for another content type pass through unchanged
    query = request.query

    original_term = query.search_term
    context = RequestContext(content_type=content_type)
    table.prepare_query(query, context)

    fragment = request.fragment
    if fragment is not None:
        fragment = context.filter_fragment(fragment)

    return QueryRewriteResponse(
        query=query,
        search_label=context.displayed_search_term(original_term),
        fragment=fragment,
    )
