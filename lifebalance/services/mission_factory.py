"""Mission Factory — turns an applied suggestion into a mission and retires the suggestion.

Invariants:
    - At most one mission per suggestion (repository enforces it on source_suggestion_id)
    - Order is always: insert mission, then deactivate suggestion
    - If deactivation fails after the mission exists, PartialApplyError is raised;
      calling apply again with the same ids finishes the job without a second mission
    - Applying an already-applied suggestion returns its mission and writes nothing
    - Suggestions of another subject are reported as not found

Design Decisions:
    - Retry-safe sequence over a cross-table transaction: the repository contract
      exposes single-row writes only, idempotency keyed by suggestion id closes the gap
"""

import logging
from uuid import UUID

from lifebalance.core.domain_types import LifeCategory
from lifebalance.core.errors import (
    LifeBalanceError, ResourceNotFoundError, SuggestionNotApplicableError,
    PartialApplyError, ErrorContext,
)
from lifebalance.core.records import Mission
from lifebalance.core.repository_protocols import ProgressRepository
from lifebalance.core.compose_mission import compose_mission
from lifebalance.core.validate_progress import parse_category, require_identifier
from lifebalance.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)

DEFAULT_XP_REWARD = 75


class MissionFactory:
    def __init__(
        self,
        repo: ProgressRepository,
        clock: Clock = utc_now,
        xp_reward: int = DEFAULT_XP_REWARD,
    ):
        self.repo = repo
        self.clock = clock
        self.xp_reward = xp_reward

    async def apply_from_suggestion(
        self, subject_id: UUID | str, suggestion_id: UUID | str,
    ) -> Mission:
        subject = require_identifier("subject_id", subject_id)
        sid = require_identifier("suggestion_id", suggestion_id)
        now = self.clock()

        suggestion = await self.repo.get_suggestion(sid)
        if suggestion is None or suggestion.subject_id != subject:
            raise ResourceNotFoundError(
                "Suggestion", str(sid), ErrorContext(subject_id=str(subject)),
            )

        mission = await self.repo.get_mission_for_suggestion(sid)
        if not suggestion.is_active:
            if mission is not None:
                return mission
            raise SuggestionNotApplicableError(str(sid), "already retired")

        if mission is None:
            if not suggestion.is_live(now):
                raise SuggestionNotApplicableError(str(sid), "expired")
            mission = await self.repo.insert_mission(
                compose_mission(subject, suggestion, self.xp_reward, now),
            )
            logger.info(
                f"Created mission '{mission.title}'",
                extra={"subject_id": subject, "suggestion_id": sid, "mission_id": mission.id},
            )

        try:
            await self.repo.deactivate_suggestion(sid, now)
        except LifeBalanceError as e:
            logger.error(
                "Suggestion not retired after mission insert",
                extra={
                    "suggestion_id": sid, "mission_id": mission.id,
                    "error_code": e.code,
                },
            )
            raise PartialApplyError(
                str(sid), str(mission.id), e,
                ErrorContext(subject_id=str(subject), category=suggestion.category.value),
            ) from e
        return mission

    async def list_missions(
        self,
        subject_id: UUID | str,
        category: LifeCategory | str | None = None,
        include_completed: bool = False,
    ) -> list[Mission]:
        subject = require_identifier("subject_id", subject_id)
        cat = parse_category(category) if category is not None else None
        return await self.repo.list_missions(subject, cat, include_completed)
