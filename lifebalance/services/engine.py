"""Engine Assembly — wires the five components over one repository.

Invariants:
    - Every component shares the same repository and clock
    - Tunables come from Settings; nothing is read from module globals

Design Decisions:
    - Plain dataclass bundle over a service locator: routes take exactly what they use
"""

from dataclasses import dataclass

from lifebalance.config import Settings
from lifebalance.core.repository_protocols import ProgressRepository
from lifebalance.services.clock import Clock, utc_now
from lifebalance.services.entry_store import EntryStore
from lifebalance.services.progress_aggregator import ProgressAggregator
from lifebalance.services.imbalance_classifier import ImbalanceClassifier
from lifebalance.services.suggestion_generator import SuggestionGenerator
from lifebalance.services.mission_factory import MissionFactory


@dataclass
class LifeBalanceEngine:
    entries: EntryStore
    aggregator: ProgressAggregator
    classifier: ImbalanceClassifier
    suggestions: SuggestionGenerator
    missions: MissionFactory


def build_engine(
    repo: ProgressRepository, settings: Settings, clock: Clock = utc_now,
) -> LifeBalanceEngine:
    aggregator = ProgressAggregator(repo, clock, settings.progress_window_days)
    classifier = ImbalanceClassifier(
        aggregator, settings.imbalance_threshold, settings.imbalance_window_days,
    )
    return LifeBalanceEngine(
        entries=EntryStore(repo, clock),
        aggregator=aggregator,
        classifier=classifier,
        suggestions=SuggestionGenerator(
            repo, classifier, clock, settings.suggestion_ttl_days,
        ),
        missions=MissionFactory(repo, clock, settings.mission_xp_reward),
    )
