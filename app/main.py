# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SteamFamily API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 5000
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    DatastoreError,
    SteamFamilyException,
    steamfamily_exception_handler,
    validation_exception_handler,
)
from app.routers import admin, downloads, health, reviews, tools
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Admin bootstrapping is not done here; see scripts/manage_admins.py.
    """
    logger.info(f"Starting SteamFamily API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down SteamFamily API")


# Create FastAPI application
app = FastAPI(
    title="SteamFamily API",
    description="""
## Community directory of gaming tools

Browse tools, download them, and leave ratings and reviews.
Administrators curate the catalog through the `/api/admin` endpoints.

### Authentication

Sign in with Supabase Auth on the client, then send the access token:

```
Authorization: Bearer <access_token>
```

| Access | Endpoints |
|--------|-----------|
| Public | `GET /api/tools*`, `GET /api/reviews/{tool_id}` |
| Signed in | `POST /api/downloads`, `POST /api/reviews`, `GET /api/auth/me` |
| Admin | `/api/admin/*` |

Errors are returned as `{"error": "...", "code": "..."}`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Tools",
            "description": "Browse the tool catalog",
        },
        {
            "name": "Reviews",
            "description": "Read and submit tool reviews",
        },
        {
            "name": "Downloads",
            "description": "Track downloads by signed-in users",
        },
        {
            "name": "Auth",
            "description": "Current user identity",
        },
        {
            "name": "Admin",
            "description": "Catalog management (admin only)",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SteamFamilyException)
async def handle_steamfamily_exception(request: Request, exc: SteamFamilyException):
    """Handle custom SteamFamily exceptions."""
    return await steamfamily_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body/path validation failures as 400."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_exception(request: Request, exc: SupabaseClientError):
    """Surface unclassified datastore failures as 500 with the underlying message."""
    error = DatastoreError(exc.message, details={"code": exc.code, **exc.details})
    return await steamfamily_exception_handler(request, error)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Public catalog
app.include_router(
    tools.router,
    prefix="/api/tools",
    tags=["Tools"]
)

app.include_router(
    reviews.router,
    prefix="/api/reviews",
    tags=["Reviews"]
)

# Signed-in users
app.include_router(
    downloads.router,
    prefix="/api/downloads",
    tags=["Downloads"]
)

app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Admin panel
app.include_router(
    admin.router,
    prefix="/api/admin",
    tags=["Admin"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "SteamFamily API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
