import json
from datetime import datetime, timezone

import pytest

from gamehost.api import game as game_api

# 2025-10-24 12:00 UTC, the instant conftest pins the clock to
PINNED_MS = int(datetime(2025, 10, 24, 12, 0, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.mark.asyncio
async def test_first_submission_is_new_best(api_client, platform_headers):
	response = await api_client.post("/api/score", json={"score": 500}, headers=platform_headers())
	assert response.status_code == 200
	payload = response.json()
	assert payload["success"] is True
	assert payload["score"] == 500
	assert payload["rank"] == 1
	assert payload["totalPlayers"] == 1
	assert payload["isNewBest"] is True
	assert payload["dateBucket"] == "20251024"
	assert payload["updatedAt"] == PINNED_MS


@pytest.mark.asyncio
async def test_lower_submission_keeps_best(api_client, platform_headers, fake_redis):
	headers = platform_headers()
	await api_client.post("/api/score", json={"score": 500}, headers=headers)
	response = await api_client.post("/api/score", json={"score": 300}, headers=headers)

	payload = response.json()
	assert payload["score"] == 500
	assert payload["rank"] == 1
	assert payload["isNewBest"] is False
	assert await fake_redis.zscore("lb:t3_post1", "alice") == 500
	assert await fake_redis.zscore("lb:t3_post1:20251024", "alice") == 500


@pytest.mark.asyncio
async def test_tie_with_best_is_not_new_best(api_client, platform_headers):
	headers = platform_headers()
	await api_client.post("/api/score", json={"score": 420}, headers=headers)
	response = await api_client.post("/api/score", json={"score": 420}, headers=headers)
	assert response.json()["isNewBest"] is False


@pytest.mark.asyncio
async def test_rank_and_total_use_global_board(api_client, platform_headers, frozen_day):
	from datetime import datetime, timezone

	await api_client.post("/api/score", json={"score": 900}, headers=platform_headers(username="bob"))
	frozen_day(datetime(2025, 10, 25, 9, 0, tzinfo=timezone.utc))
	response = await api_client.post("/api/score", json={"score": 700}, headers=platform_headers(username="alice"))

	payload = response.json()
	# bob only played yesterday but still counts on the all-time board
	assert payload["rank"] == 2
	assert payload["totalPlayers"] == 2
	assert payload["dateBucket"] == "20251025"


@pytest.mark.asyncio
async def test_score_is_clamped(api_client, platform_headers):
	low = await api_client.post("/api/score", json={"score": -50}, headers=platform_headers(username="low"))
	assert low.json()["score"] == 0

	high = await api_client.post("/api/score", json={"score": 5e12}, headers=platform_headers(username="high"))
	assert high.json()["score"] == 1_000_000_000


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"score": "500"}, {"score": True}, {"score": None}, {}, {"points": 3}])
async def test_invalid_score_rejected(api_client, platform_headers, body):
	response = await api_client.post("/api/score", json=body, headers=platform_headers())
	assert response.status_code == 400
	assert response.json() == {"error": "Invalid score"}


@pytest.mark.asyncio
async def test_non_finite_score_rejected(api_client, platform_headers):
	headers = {**platform_headers(), "Content-Type": "application/json"}
	response = await api_client.post("/api/score", content='{"score": NaN}', headers=headers)
	assert response.status_code == 400


@pytest.mark.asyncio
async def test_score_beyond_float_range_rejected(api_client, platform_headers):
	headers = {**platform_headers(), "Content-Type": "application/json"}
	huge = "1" + "0" * 400
	response = await api_client.post("/api/score", content=f'{{"score": {huge}}}', headers=headers)
	assert response.status_code == 400
	assert response.json() == {"error": "Invalid score"}


@pytest.mark.asyncio
async def test_non_object_body_reads_as_missing_score(api_client, platform_headers):
	response = await api_client.post("/api/score", json=[1], headers=platform_headers())
	assert response.status_code == 400
	assert response.json() == {"error": "Invalid score"}


@pytest.mark.asyncio
async def test_anonymous_submission_requires_login(api_client, platform_headers):
	response = await api_client.post("/api/score", json={"score": 10}, headers=platform_headers(username=None))
	assert response.status_code == 401
	assert response.json() == {"error": "Login required"}


@pytest.mark.asyncio
async def test_missing_post_rejected(api_client, platform_headers):
	response = await api_client.post("/api/score", json={"score": 10}, headers=platform_headers(post_id=None))
	assert response.status_code == 400
	assert response.json() == {"error": "Missing postId in context"}


@pytest.mark.asyncio
async def test_submission_mirrors_best_into_state(api_client, platform_headers, fake_redis):
	headers = platform_headers()
	await api_client.post("/api/state", json={"data": {"level": 4, "date": "old"}}, headers=headers)
	await api_client.post("/api/score", json={"score": 1234.5}, headers=headers)

	stored = json.loads(await fake_redis.get("state:t3_post1:alice"))
	assert stored["bestScore"] == 1234.5
	assert stored["data"] == {"level": 4, "date": "20251024"}


@pytest.mark.asyncio
async def test_store_failure_returns_500(api_client, platform_headers, monkeypatch):
	async def boom(*args, **kwargs):
		raise ConnectionError("redis down")

	monkeypatch.setattr(game_api._score_service._store, "zscore", boom)
	response = await api_client.post("/api/score", json={"score": 10}, headers=platform_headers())
	assert response.status_code == 500
	assert response.json() == {"error": "Failed to submit score"}
