"""Personal Budget API Package — envelope budgeting over a fixed total budget.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
