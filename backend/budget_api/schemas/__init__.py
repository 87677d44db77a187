"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate request shape at the system boundary
    - Ledger rules (uniqueness, ceilings, balances) are NOT duplicated here

Design Decisions:
    - Separate from core: schemas are API contracts, domain types are ledger state
"""
