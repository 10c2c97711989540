"""Infrastructure Layer — database, logging and external service clients.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to core/errors.py types
"""
