# =============================================================================
# app/routers/downloads.py - Download Tracking Endpoint
# =============================================================================
# Downloads are only counted for signed-in users.
# =============================================================================

from fastapi import APIRouter, status

from app.dependencies import CurrentUser
from core.models.common import SuccessResponse
from core.models.download import DownloadCreate
from core.services.download_service import DownloadService

router = APIRouter()


@router.post("", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def record_download(
    download: DownloadCreate,
    user: CurrentUser,
):
    """
    Record a download event for the current user.

    Raises:
        401: Not authenticated (nothing is recorded)
    """
    DownloadService.record_download(user.id, download)
    return SuccessResponse()
