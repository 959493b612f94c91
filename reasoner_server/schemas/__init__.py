"""Pydantic Schemas — response models for the JSON API endpoints.

Invariants:
    - Schemas describe the JSON surface only; reasoner payloads go through codecs
"""
