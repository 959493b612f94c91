"""Core Layer — session directory, codec selection, IRI parsing, error types.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - No HTTP types in core/: request values arrive already extracted
"""
