"""Infrastructure Layer — database sessions, vehicle store, logging, identifiers.

Invariants:
    - SQLAlchemy exceptions never cross into services/ (mapped to Failed)
"""
