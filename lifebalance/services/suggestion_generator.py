"""Suggestion Generator — ranked, time-boxed suggestions for imbalanced categories.

Invariants:
    - generate() never creates suggestions for a category that already has an
      active, unexpired suggestion (repeated calls do not pile up duplicates)
    - Every created suggestion has expires_at strictly after the generation time
    - list_active() returns is_active AND expires_at > now, priority descending
    - Store failures propagate; suggestions inserted before a failure stay inserted

Design Decisions:
    - Composition is pure (core/compose_suggestions.py); this class only reads
      the imbalances, reads what is already covered, and writes the plan
"""

import logging
from uuid import UUID

from lifebalance.core.domain_types import LifeCategory
from lifebalance.core.records import Suggestion
from lifebalance.core.repository_protocols import SuggestionRepository
from lifebalance.core.compose_suggestions import plan_suggestions
from lifebalance.core.validate_progress import parse_category, require_identifier
from lifebalance.services.clock import Clock, utc_now
from lifebalance.services.imbalance_classifier import ImbalanceClassifier

logger = logging.getLogger(__name__)

DEFAULT_TTL_DAYS = 14


class SuggestionGenerator:
    def __init__(
        self,
        repo: SuggestionRepository,
        classifier: ImbalanceClassifier,
        clock: Clock = utc_now,
        ttl_days: int = DEFAULT_TTL_DAYS,
    ):
        self.repo = repo
        self.classifier = classifier
        self.clock = clock
        self.ttl_days = ttl_days

    async def generate(self, subject_id: UUID | str) -> int:
        """Create suggestions for every uncovered imbalanced category. Returns the count."""
        subject = require_identifier("subject_id", subject_id)
        now = self.clock()
        imbalances = await self.classifier.imbalanced_categories(subject)
        if not imbalances:
            logger.debug("No imbalanced categories", extra={"subject_id": subject})
            return 0

        active = await self.repo.list_active_suggestions(subject, now)
        covered = {s.category for s in active}
        skipped = [i.category.value for i in imbalances if i.category in covered]
        if skipped:
            logger.debug(
                f"Skipping categories with active suggestions: {', '.join(skipped)}",
                extra={"subject_id": subject},
            )

        planned = plan_suggestions(
            subject, imbalances, covered, now, self.ttl_days,
            self.classifier.default_threshold, self.classifier.default_window_days,
        )
        for suggestion in planned:
            await self.repo.insert_suggestion(suggestion)

        logger.info(
            f"Generated {len(planned)} suggestion(s)",
            extra={"subject_id": subject, "count": len(planned)},
        )
        return len(planned)

    async def list_active(
        self, subject_id: UUID | str, category: LifeCategory | str | None = None,
    ) -> list[Suggestion]:
        subject = require_identifier("subject_id", subject_id)
        cat = parse_category(category) if category is not None else None
        return await self.repo.list_active_suggestions(subject, self.clock(), cat)
