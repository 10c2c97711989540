"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every HTTP response uses the {success, message, data} envelope

Design Decisions:
    - Thin routes: writes delegate to writers, gateway calls to services
"""
