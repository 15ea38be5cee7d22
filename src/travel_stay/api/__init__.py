"""
travel_stay.api

API package for the Travel Stay service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error mapping and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + access declaration +
# delegation to services.
