"""
travel_stay.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories for the
  principal, owner-record and listing collections.
"""

# Package marker.
