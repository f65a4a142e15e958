"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every row is scoped by subject_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from lifebalance.models.progress_entry import ProgressEntryRow  # noqa: F401
from lifebalance.models.suggestion import SuggestionRow  # noqa: F401
from lifebalance.models.mission import MissionRow  # noqa: F401
