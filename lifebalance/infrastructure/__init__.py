"""Infrastructure Layer — database access, repository implementation and logging.

Invariants:
    - Infrastructure never contains domain rules (those live in core/)
    - All SQLAlchemy failures mapped to StoreError at this boundary

Design Decisions:
    - Concrete repository lives here so services stay storage-agnostic
"""
