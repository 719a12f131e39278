# =============================================================================
# core/models/download.py - Download Tracking Schemas
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, Field


class DownloadCreate(BaseModel):
    """
    Payload for POST /api/downloads.

    Records which button a signed-in user clicked. The label is stored as a
    snapshot so later button edits don't rewrite history.
    """

    tool_id: UUID = Field(..., description="Tool that was downloaded")

    button_label: str = Field(
        ...,
        min_length=1,
        description="Label of the button that was clicked",
        examples=["Download (Windows)"],
    )
