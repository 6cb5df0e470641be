"""Core Layer — vehicle rules, outcome types and store contract. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (modelYear bound reads the clock)
"""
