"""
Domain error to HTTP translation.

Dependencies: fastapi, concierge.core.exceptions, concierge.models.common
System role: Router helper for consistent error responses
"""

from fastapi import HTTPException

from concierge.configs import get_settings
from concierge.core.exceptions import ConciergeException
from concierge.models.common import ErrorResponse


def to_http_exception(error: ConciergeException, status_code: int, public_message: str) -> HTTPException:
    """
    Build an HTTPException with a generic message.

    Internal details are attached only when debug is enabled.
    """
    body = ErrorResponse(error=public_message)
    if get_settings().debug:
        body.details = {"message": error.message, **error.details}
    return HTTPException(status_code=status_code, detail=body.model_dump(exclude_none=True))
