# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Bookshelf API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from app.config import settings
from app.exceptions import (
    BookshelfException,
    bookshelf_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import books, health, users
from core.services.book_store import BookStore
from core.services.user_store import UserStore
from lib.mongo_client import MongoClient, MongoClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def prepare_indexes() -> None:
    """
    Create the indexes every store relies on.

    A database that is down at startup is logged, not fatal: the API still
    starts, /health/ready reports it as degraded, and the stores retry
    before their first write.
    """
    for store_class in (BookStore, UserStore):
        try:
            store = store_class(MongoClient.get_collection(store_class.collection_name))
            await store.ensure_indexes()
        except (PyMongoError, MongoClientError) as e:
            logger.warning(f"Could not prepare indexes for {store_class.collection_name}: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: ensure MongoDB indexes
    - Shutdown: close the MongoDB client
    """
    logger.info(f"Starting Bookshelf API in {settings.ENVIRONMENT} mode")
    logger.info(f"Using MongoDB database: {settings.MONGODB_DATABASE}")
    await prepare_indexes()

    yield

    logger.info("Shutting down Bookshelf API")
    await MongoClient.close()


# Create FastAPI application
app = FastAPI(
    title="Bookshelf API",
    description="CRUD endpoints for books and users backed by MongoDB.",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Books", "description": "Create, read, update and delete books"},
        {"name": "Users", "description": "Create, read, update and delete users"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its response status."""
    try:
        response = await call_next(request)
    except Exception as e:
        # Answered as 500 by unexpected_exception_handler
        logger.error(f"{request.method} {request.url.path} -> 500 ({type(e).__name__})")
        raise
    logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(BookshelfException, bookshelf_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unexpected_exception_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    books.router,
    prefix="/books",
    tags=["Books"]
)

app.include_router(
    users.router,
    prefix="/users",
    tags=["Users"]
)

app.include_router(
    health.router,
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", response_class=PlainTextResponse, tags=["Root"])
async def root():
    """Liveness message for humans."""
    return "Backend is running successfully"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
