import json

import pytest

from gamehost.api import internal as internal_api
from gamehost.domain.posts.service import CreatedPost


@pytest.mark.asyncio
async def test_init_returns_post_and_user(api_client, platform_headers):
	response = await api_client.get("/api/init", headers=platform_headers())
	assert response.status_code == 200
	assert response.json() == {"type": "init", "postId": "t3_post1", "username": "alice"}


@pytest.mark.asyncio
async def test_init_falls_back_to_anonymous(api_client, platform_headers):
	response = await api_client.get("/api/init", headers=platform_headers(username=None))
	assert response.json()["username"] == "anonymous"


@pytest.mark.asyncio
async def test_init_without_post(api_client, platform_headers):
	response = await api_client.get("/api/init", headers=platform_headers(post_id=None))
	assert response.status_code == 400
	assert response.json() == {
		"status": "error",
		"message": "postId is required but missing from context",
	}


@pytest.mark.asyncio
async def test_app_install_creates_post(api_client, platform_headers, fake_redis):
	response = await api_client.post("/internal/on-app-install", headers=platform_headers(post_id=None))
	assert response.status_code == 200
	payload = response.json()
	assert payload["status"] == "success"
	assert payload["message"].startswith("Post created in subreddit gamehost_dev with id t3_")

	records = await fake_redis.lrange("posts:gamehost_dev", 0, -1)
	assert len(records) == 1
	assert json.loads(records[0])["id"] in payload["message"]


@pytest.mark.asyncio
async def test_menu_post_create_navigates_to_post(api_client, platform_headers, monkeypatch):
	async def fake_publish(subreddit_name, title):
		return CreatedPost(id="t3_abc123", subreddit_name=subreddit_name, title=title)

	monkeypatch.setattr(internal_api._service._publisher, "publish", fake_publish)
	response = await api_client.post("/internal/menu/post-create", headers=platform_headers())
	assert response.status_code == 200
	assert response.json() == {"navigateTo": "https://reddit.com/r/gamehost_dev/comments/t3_abc123"}


@pytest.mark.asyncio
async def test_post_creation_failure(api_client, platform_headers, monkeypatch):
	async def broken_publish(subreddit_name, title):
		raise RuntimeError("platform unavailable")

	monkeypatch.setattr(internal_api._service._publisher, "publish", broken_publish)
	for path in ("/internal/on-app-install", "/internal/menu/post-create"):
		response = await api_client.post(path, headers=platform_headers())
		assert response.status_code == 400
		assert response.json() == {"status": "error", "message": "Failed to create post"}


@pytest.mark.asyncio
async def test_post_creation_needs_subreddit(api_client, platform_headers):
	response = await api_client.post("/internal/on-app-install", headers=platform_headers(subreddit=None))
	assert response.status_code == 400
