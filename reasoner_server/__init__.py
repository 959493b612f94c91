"""Reasoner Server — HTTP request-handling core for a stateful ontology reasoner.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
