"""Storefront Application Package — catalog REST API with a live change feed.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
