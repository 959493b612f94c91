"""API Layer — request extraction, the reasoner handler, routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Errors surface as status + JSON envelope, never as stack traces
"""
