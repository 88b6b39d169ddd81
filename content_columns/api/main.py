"""Content Columns API - column definitions service.

Serves normalized list-view column declarations and applies them for
hosts that call over HTTP:
- Column declarations per content type
- Visible / sortable column projection
- Listing query rewriting (attribute sort, attribute-or-title search)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_columns import __version__
from content_columns.api.routes import columns, listing
from content_columns.columns.registry import get_column_catalog

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: malformed column definitions stop the service here
    logger.info("Loading column definitions...")
    catalog = get_column_catalog()
    logger.info(f"Loaded columns for {catalog.count()} content types")

    logger.info("Content Columns API ready")
    yield
    logger.info("Shutting down Content Columns API")


app = FastAPI(
    title="Content Columns API",
    description="""
## Column Definitions Service

Declarative list-view columns for content collections.

### Key Endpoints

- `GET /v1/columns` - List content types
- `GET /v1/columns/{content_type}` - Normalized columns of a content type
- `POST /v1/listing/{content_type}/visible` - Apply columns to default headers
- `POST /v1/listing/{content_type}/sortable` - Apply sortability to default sortable set
- `POST /v1/listing/{content_type}/query` - Rewrite a listing query
""",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(columns.router, prefix="/v1")
app.include_router(listing.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "Content Columns API",
        "version": __version__,
        "description": "List-view column definitions service",
        "docs": "/docs",
        "endpoints": {
            "columns": "/v1/columns",
            "listing": "/v1/listing",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    catalog = get_column_catalog()
    return {
        "status": "healthy",
        "content_types_loaded": catalog.count(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "content_columns.api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
