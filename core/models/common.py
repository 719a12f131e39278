# =============================================================================
# core/models/common.py - Shared Field Types and Responses
# =============================================================================
# Reusable annotated types for the request schemas:
# - UrlStr: a string that must parse as an absolute URL (any scheme, so
#   magnet: and steam:// links pass), kept verbatim
# - OptionalUrlStr: same, but "" and None both mean "not set"
# =============================================================================

from typing import Annotated, Any

from pydantic import AfterValidator, AnyUrl, BaseModel, BeforeValidator, Field, TypeAdapter, ValidationError

_any_url = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """Validate the URL syntax but return the caller's original string."""
    try:
        _any_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]

OptionalUrlStr = Annotated[UrlStr | None, BeforeValidator(_blank_to_none)]


class SuccessResponse(BaseModel):
    """Generic acknowledgement for writes that return no entity."""
    success: bool = Field(default=True, examples=[True])
