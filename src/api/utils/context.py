from fastapi import Request

from src.app.use_cases.auth.dtos import ClientContext

UNKNOWN = "unknown"


def get_client_context(request: Request) -> ClientContext:
    """
    Build the session binding for the calling client.

    Device comes from X-Device-Id and location from X-Client-Location, both
    set by the client application.
    """
    return ClientContext(
        user_agent=request.headers.get("user-agent") or UNKNOWN,
        ip_address=request.client.host if request.client else "",
        device=request.headers.get("x-device-id") or UNKNOWN,
        location=request.headers.get("x-client-location") or None,
    )
