from datetime import datetime, timezone

import pytest


async def _submit(api_client, platform_headers, username, score):
	response = await api_client.post("/api/score", json={"score": score}, headers=platform_headers(username=username))
	assert response.status_code == 200
	return response.json()


@pytest.mark.asyncio
async def test_top_one_and_caller_rank(api_client, platform_headers):
	await _submit(api_client, platform_headers, "alice", 500)
	await _submit(api_client, platform_headers, "bob", 700)

	response = await api_client.get("/api/leaderboard?limit=1", headers=platform_headers(username="alice"))
	assert response.status_code == 200
	payload = response.json()
	assert payload["top"] == [{"rank": 1, "username": "bob", "score": 700, "date": "20251024"}]
	assert payload["me"] == {"rank": 2, "username": "alice", "score": 500, "date": "20251024"}
	assert payload["totalPlayers"] == 2
	assert payload["filterDate"] == "20251024"
	assert isinstance(payload["generatedAt"], int)


@pytest.mark.asyncio
async def test_top_n_comes_from_the_high_end(api_client, platform_headers):
	for name, score in (("a", 100), ("b", 300), ("c", 200), ("d", 50)):
		await _submit(api_client, platform_headers, name, score)

	response = await api_client.get("/api/leaderboard?limit=2", headers=platform_headers(username="d"))
	payload = response.json()
	assert [(row["rank"], row["username"]) for row in payload["top"]] == [(1, "b"), (2, "c")]
	assert payload["me"]["rank"] == 4


@pytest.mark.asyncio
async def test_default_limit_and_no_entry_for_caller(api_client, platform_headers):
	for idx in range(12):
		await _submit(api_client, platform_headers, f"player{idx:02d}", idx * 10)

	response = await api_client.get("/api/leaderboard", headers=platform_headers(username="spectator"))
	payload = response.json()
	assert len(payload["top"]) == 10
	assert payload["top"][0]["username"] == "player11"
	assert payload["me"] is None
	assert payload["totalPlayers"] == 12


@pytest.mark.asyncio
async def test_daily_bucket_resets_at_utc_midnight(api_client, platform_headers, frozen_day):
	await _submit(api_client, platform_headers, "alice", 500)

	frozen_day(datetime(2025, 10, 25, 0, 0, 1, tzinfo=timezone.utc))
	today = (await api_client.get("/api/leaderboard", headers=platform_headers())).json()
	assert today["top"] == []
	assert today["me"] is None
	assert today["totalPlayers"] == 0
	assert today["filterDate"] == "20251025"

	yesterday = (await api_client.get("/api/leaderboard?date=20251024", headers=platform_headers())).json()
	assert [row["username"] for row in yesterday["top"]] == ["alice"]
	assert yesterday["me"]["rank"] == 1


@pytest.mark.asyncio
async def test_daily_best_is_per_day(api_client, platform_headers, frozen_day):
	await _submit(api_client, platform_headers, "alice", 900)
	frozen_day(datetime(2025, 10, 25, 8, 0, tzinfo=timezone.utc))
	await _submit(api_client, platform_headers, "alice", 200)

	payload = (await api_client.get("/api/leaderboard", headers=platform_headers())).json()
	assert payload["me"]["score"] == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", ["abc", "0", "-5", "1.9"])
async def test_odd_limits_still_answer(api_client, platform_headers, limit):
	await _submit(api_client, platform_headers, "alice", 10)
	await _submit(api_client, platform_headers, "bob", 20)

	response = await api_client.get(f"/api/leaderboard?limit={limit}", headers=platform_headers())
	assert response.status_code == 200
	expected = 2 if limit == "abc" else 1
	assert len(response.json()["top"]) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("date", ["2025-10-24", "yesterday", "20251341"])
async def test_malformed_date_rejected(api_client, platform_headers, date):
	response = await api_client.get(f"/api/leaderboard?date={date}", headers=platform_headers())
	assert response.status_code == 400
	assert response.json() == {"error": "Invalid date"}


@pytest.mark.asyncio
async def test_leaderboard_requires_post_context(api_client, platform_headers):
	response = await api_client.get("/api/leaderboard", headers=platform_headers(post_id=None))
	assert response.status_code == 400
