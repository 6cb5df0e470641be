"""Vehicle World API — CRUD service for the vehicle resource.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
