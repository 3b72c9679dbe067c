"""Product Catalog Package — file-backed product catalog with get-or-create dependents.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
