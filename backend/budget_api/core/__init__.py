"""Core Layer — pure ledger logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from api/, schemas/, or infrastructure/
    - Rule checks are pure; only EnvelopeLedger holds state

Design Decisions:
    - Functional core separated from imperative shell (ADR: routes stay thin)
"""
