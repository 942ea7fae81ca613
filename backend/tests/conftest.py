import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from gamehost.domain.common import clock
from gamehost.main import app
from gamehost.settings import settings


FIXED_NOW = datetime(2025, 10, 24, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from gamehost.infra.redis import redis_client, set_redis_client

	original = redis_client._client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def frozen_day(monkeypatch):
	"""Pin the UTC day so daily buckets are deterministic; tests may re-pin."""
	state = {"now": FIXED_NOW}

	def _set(value: datetime) -> None:
		state["now"] = value

	monkeypatch.setattr(clock, "utcnow", lambda: state["now"])
	return _set


@pytest.fixture(autouse=True)
def force_test_settings():
	original_env = settings.environment
	settings.environment = "dev"
	try:
		yield
	finally:
		settings.environment = original_env


@pytest.fixture()
def platform_headers():
	"""Build the headers the hosting platform attaches to proxied requests."""

	def _build(post_id="t3_post1", username="alice", subreddit="gamehost_dev"):
		headers = {}
		if post_id is not None:
			headers[settings.platform_post_header] = post_id
		if username is not None:
			headers[settings.platform_user_header] = username
		if subreddit is not None:
			headers[settings.platform_subreddit_header] = subreddit
		return headers

	return _build


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
