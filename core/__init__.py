# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for request/response validation
# - services/: Catalog, review, download, stats and user operations
#
# Services raise app.exceptions errors but never touch Request/Response
# objects, so they can be called from routes and scripts alike.
# =============================================================================
