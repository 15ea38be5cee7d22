"""
travel_stay.errors

Domain error taxonomy shared by the authorization core and services.

Responsibilities:
- Name every failure outcome the core can surface to the transport layer.
- Carry a stable HTTP status so the API boundary can map errors uniformly.
"""

from __future__ import annotations


class TravelStayError(Exception):
    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(TravelStayError):
    # Missing, malformed, badly signed or expired bearer token. Never retried.
    status_code = 401
    default_message = "unauthorized access"


class Forbidden(TravelStayError):
    # Role or ownership mismatch. Never retried.
    status_code = 403
    default_message = "Forbidden Access."


class NotFound(TravelStayError):
    status_code = 404
    default_message = "Not found"


class ValidationIgnored(TravelStayError):
    # Input was understood but carries a value the operation does not act on.
    status_code = 422
    default_message = "Request ignored"


class StoreUnavailable(TravelStayError):
    # Transient collaborator failure; retry policy belongs to the caller.
    status_code = 503
    default_message = "Store unavailable"


# --- Module Notes -----------------------------------------------------------
# Handlers for these exceptions are registered in `travel_stay.api.errors`.
