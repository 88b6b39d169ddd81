"""API routes for column declarations.

Host listing frameworks fetch the normalized columns of a content type
to build their list headers.
"""

import logging

from fastapi import APIRouter, HTTPException

from content_columns.columns.registry import ColumnRegistry, get_column_catalog
from content_columns.columns.schemas import ColumnSummary, ContentTypeSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/columns", tags=["columns"])


def get_registry_or_404(content_type: str) -> ColumnRegistry:
    """Get a content type's registry or raise 404."""
    catalog = get_column_catalog()
    registry = catalog.get(content_type)
    if registry is None:
        available = catalog.list_content_types()
        raise HTTPException(
            status_code=404,
            detail=f"Content type '{content_type}' not found. Available: {available}",
        )
    return registry


@router.get("", response_model=list[ContentTypeSummary])
async def list_content_types():
    """List content types with column definitions."""
    return get_column_catalog().list_summaries()


@router.get("/{content_type}", response_model=list[ColumnSummary])
async def list_columns(content_type: str):
    """List the normalized columns of a content type, in declaration order."""
    return get_registry_or_404(content_type).list_summaries()


@router.get("/{content_type}/{column_key}", response_model=ColumnSummary)
async def get_column(content_type: str, column_key: str):
    """Get one normalized column."""
    summary = get_registry_or_404(content_type).summarize(column_key)
    if summary is None:
        raise HTTPException(
            status_code=404,
            detail=f"Column '{column_key}' not declared for '{content_type}'",
        )
    return summary
