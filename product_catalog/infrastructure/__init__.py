"""Infrastructure Layer — filesystem persistence and logging setup.

Invariants:
    - Only this layer touches the filesystem
    - Expected IO failures are returned as RepositoryResult, never raised
"""
