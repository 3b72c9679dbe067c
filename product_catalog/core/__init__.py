"""Core Layer — pure domain logic, no IO, no async, no filesystem.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: validation and result
      mapping are testable without a store
"""
