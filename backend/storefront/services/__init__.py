"""Services Layer — change feed, connection lifecycle, write adapters and gateway services.

Invariants:
    - Routes never touch the ORM directly for writes; every mutation goes through a writer
    - Every successful write publishes exactly one ChangeEvent (best effort)
    - Reads never touch the broadcaster
"""
