# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - tools.py: Public tool catalog endpoints
# - reviews.py: Review listing and submission
# - downloads.py: Download tracking
# - admin.py: Admin catalog management (admin guard on every route)
#
# Each router is mounted in main.py with a URL prefix. Handlers that touch
# Supabase are plain def: the client is synchronous, so they run in the
# threadpool.
# =============================================================================

from . import health
from . import tools
from . import reviews
from . import downloads
from . import admin

__all__ = [
    "health",
    "tools",
    "reviews",
    "downloads",
    "admin",
]
