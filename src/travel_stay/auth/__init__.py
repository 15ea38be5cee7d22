"""
travel_stay.auth

Authentication/authorization package.

Responsibilities:
- Session token issuing and verification.
- Role resolution against the user store.
- The authorization gate and its FastAPI dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package reaches the store through globals; every component
# receives its session explicitly.
