"""Services Layer — get-or-create resolution, product cache and product service.

Invariants:
    - Services orchestrate stores; business rules live in core/
    - Every public service operation returns a ServiceResult envelope

Design Decisions:
    - Helpers split out of product_service.py for locality (one concern per file)
"""
