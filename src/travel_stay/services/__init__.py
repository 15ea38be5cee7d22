"""
travel_stay.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Implement the listing lifecycle, promotions, registration and analytics.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services never check roles; by the time they run, the gate has already admitted
# the caller for the route.
