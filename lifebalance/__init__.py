"""Life Balance Engine — daily self-ratings to averages, imbalances, suggestions and missions.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
