"""API Schemas — Pydantic models at the HTTP boundary.

Invariants:
    - *Create models declare the required fields; missing ones fail with 400
    - *Update models are all-optional; only fields present in the body change
    - *Read models serialize ORM records for responses and change events alike
"""
