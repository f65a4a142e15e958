"""Services Layer — the five engine components, each holding an injected repository.

Invariants:
    - Services depend on repository Protocols, never on SQLAlchemy
    - Store failures propagate unchanged; services never retry internally

Design Decisions:
    - One class per component for locality: EntryStore, ProgressAggregator,
      ImbalanceClassifier, SuggestionGenerator, MissionFactory
"""
