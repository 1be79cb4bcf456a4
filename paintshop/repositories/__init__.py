"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy queries and patterns for each domain area.
They never commit implicitly except in the create/update/delete helpers that
return the persisted row.
"""
