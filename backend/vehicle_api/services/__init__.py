"""Services Layer — resource controllers mapping store outcomes to responses.

Invariants:
    - Controllers never inspect raw requests; they receive id, body and store
"""
