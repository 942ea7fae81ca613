"""Post creation for the platform lifecycle hooks."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Protocol

from gamehost.domain.common import clock
from gamehost.domain.common.errors import PostCreationFailed
from gamehost.infra.platform import RequestContext
from gamehost.infra.store import GameStore, store as default_store
from gamehost.obs import metrics
from gamehost.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedPost:
	id: str
	subreddit_name: str
	title: str


class PostPublisher(Protocol):
	async def publish(self, subreddit_name: str, title: str) -> CreatedPost: ...


def posts_key(subreddit_name: str) -> str:
	return f"posts:{subreddit_name}"


class RedisPostPublisher:
	"""Allocates post ids locally and records them per subreddit."""

	def __init__(self, store: GameStore | None = None) -> None:
		self._store = store or default_store

	async def publish(self, subreddit_name: str, title: str) -> CreatedPost:
		post = CreatedPost(id=f"t3_{uuid.uuid4().hex[:10]}", subreddit_name=subreddit_name, title=title)
		record = {"id": post.id, "title": post.title, "createdAt": clock.now_ms()}
		await self._store.append(posts_key(subreddit_name), json.dumps(record, separators=(",", ":")))
		return post


class PostService:
	def __init__(self, publisher: Optional[PostPublisher] = None) -> None:
		self._publisher: PostPublisher = publisher or RedisPostPublisher()

	async def create_post(self, ctx: RequestContext, *, trigger: str) -> CreatedPost:
		if not ctx.subreddit_name:
			metrics.inc_post_created(trigger, "error")
			raise PostCreationFailed()
		try:
			post = await self._publisher.publish(ctx.subreddit_name, settings.post_title)
		except Exception as exc:
			metrics.inc_post_created(trigger, "error")
			logger.error("post_create_failed", extra={"trigger": trigger, "subreddit": ctx.subreddit_name})
			raise PostCreationFailed() from exc
		metrics.inc_post_created(trigger)
		logger.info("post_created", extra={"trigger": trigger, "post_id": post.id, "subreddit": post.subreddit_name})
		return post

	@staticmethod
	def post_url(post: CreatedPost) -> str:
		return f"{settings.post_url_base.rstrip('/')}/r/{post.subreddit_name}/comments/{post.id}"
