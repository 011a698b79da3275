"""Pydantic Schemas — response shapes for API endpoints.

Invariants:
    - Schemas shape rows at the system boundary; input validation lives in core/
    - Separate from models: schemas are API contracts, models are persistence
"""
