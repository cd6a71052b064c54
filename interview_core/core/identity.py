"""
Description:
Requester identity for the HTTP layer. Authentication happens upstream; the
gateway forwards the authenticated user id in the X-Requester-Id header and the
core treats it as an opaque, stable string.

Dependencies:
- fastapi: For the Request object used as a dependency.
"""
from fastapi import Request
from interview_core.errors.exceptions import Unauthorized

REQUESTER_HEADER = "X-Requester-Id"


def get_requester_id(request: Request) -> str:
    """
    FastAPI dependency returning the authenticated requester id.

    Raises:
        Unauthorized: If the header is missing or blank
    """
    requester_id = request.headers.get(REQUESTER_HEADER, "").strip()
    if not requester_id:
        raise Unauthorized("Missing or invalid requester identity")
    return requester_id
