"""HTTP Routes — end-to-end flow over the FastAPI app with the test database.

Invariants:
    - Domain errors come back in the structured error envelope
    - Scenario flow: entries -> imbalances -> suggestions -> apply -> missions
"""

from uuid import uuid4

import pytest

from lifebalance.api.error_handlers import retry_headers
from lifebalance.core.errors import ErrorContext, PartialApplyError, StoreError

from tests.services.fixed_clock import SCENARIO_SCORES


@pytest.fixture
async def seeded_subject(client):
    subject = uuid4()
    for category, score in SCENARIO_SCORES.items():
        res = await client.put(
            f"/api/v1/subjects/{subject}/entries",
            json={"category": category, "score": score},
        )
        assert res.status_code == 200
    return subject


async def test_health_is_up(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_categories_lists_seven_with_labels(client):
    res = await client.get("/api/v1/categories")
    body = res.json()
    assert len(body) == 7
    assert body[0] == {"category": "spiritual", "label": "Spiritual", "color": "#9333EA"}


async def test_upsert_overwrites_same_day(client):
    subject = uuid4()
    for score in (30, 80):
        await client.put(
            f"/api/v1/subjects/{subject}/entries",
            json={"category": "health", "score": score},
        )
    res = await client.get(f"/api/v1/subjects/{subject}/entries/today")
    assert [e["score"] for e in res.json()] == [80]


async def test_out_of_range_score_is_rejected(client):
    res = await client.put(
        f"/api/v1/subjects/{uuid4()}/entries",
        json={"category": "health", "score": 101},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_latest_entry_is_null_without_history(client):
    res = await client.get(f"/api/v1/subjects/{uuid4()}/entries/health/latest")
    assert res.status_code == 200
    assert res.json() is None


async def test_overall_progress(client, seeded_subject):
    res = await client.get(f"/api/v1/subjects/{seeded_subject}/progress")
    body = res.json()
    assert res.status_code == 200
    assert body["overall_score"] == 50.0
    assert len(body["category_scores"]) == 7


async def test_imbalances_scenario(client, seeded_subject):
    res = await client.get(
        f"/api/v1/subjects/{seeded_subject}/imbalances", params={"threshold": 50},
    )
    body = res.json()
    assert [i["category"] for i in body] == ["spiritual", "family", "social"]
    assert body[0]["severity"] == "critical"
    assert body[0]["severity_label"] == "Needs Immediate Attention"


async def test_generate_apply_and_list_missions(client, seeded_subject):
    base = f"/api/v1/subjects/{seeded_subject}"
    res = await client.post(f"{base}/suggestions/generate")
    assert res.status_code == 201
    assert res.json() == {"created": 6}

    spiritual = (await client.get(
        f"{base}/suggestions", params={"category": "spiritual"},
    )).json()
    target = spiritual[0]["id"]

    res = await client.post(f"{base}/suggestions/{target}/apply")
    assert res.status_code == 200
    assert res.json()["category"] == "spiritual"
    assert res.json()["xp_reward"] == 75

    remaining = (await client.get(
        f"{base}/suggestions", params={"category": "spiritual"},
    )).json()
    assert target not in {s["id"] for s in remaining}

    missions = (await client.get(f"{base}/missions")).json()
    assert len(missions) == 1


async def test_apply_unknown_suggestion_is_404(client):
    res = await client.post(
        f"/api/v1/subjects/{uuid4()}/suggestions/{uuid4()}/apply",
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_delete_unknown_entry_is_404(client):
    res = await client.delete(f"/api/v1/entries/{uuid4()}")
    assert res.status_code == 404


def test_retry_after_header_only_for_errors_with_a_delay():
    partial = PartialApplyError(
        "sug-1", "mis-1", StoreError("timeout", "deactivate_suggestion"),
    )
    assert retry_headers(partial) == {"Retry-After": "1"}
    slow = StoreError("busy", "query", ErrorContext(retry_after_ms=2500))
    assert retry_headers(slow) == {"Retry-After": "3"}
    assert retry_headers(StoreError("busy", "query")) == {}


async def test_validation_details_name_the_body_field(client):
    res = await client.put(
        f"/api/v1/subjects/{uuid4()}/entries",
        json={"category": "career", "score": 50},
    )
    assert res.status_code == 400
    details = res.json()["error"]["details"]
    assert {"field": "category", "location": "body"}.items() <= details[0].items()


async def test_non_uuid_subject_is_rejected_as_path_field(client):
    res = await client.get("/api/v1/subjects/not-a-uuid/progress")
    assert res.status_code == 400
    detail = res.json()["error"]["details"][0]
    assert detail["location"] == "path"
    assert detail["field"] == "subject_id"
