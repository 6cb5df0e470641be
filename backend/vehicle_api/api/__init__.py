"""API Layer — FastAPI routes, request guards and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes compose guards and controllers; no validation logic inline
"""
