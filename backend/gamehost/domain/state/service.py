"""Service layer for per-user game state."""

from __future__ import annotations

import logging
from typing import Any, Optional

from gamehost.domain.common import clock
from gamehost.domain.common.errors import LoginRequired, StateNotFound, StateValidationError
from gamehost.domain.state.models import StoredState, state_key
from gamehost.infra.platform import RequestContext
from gamehost.infra.store import GameStore, store as default_store
from gamehost.obs import metrics

logger = logging.getLogger(__name__)

_MISSING = object()


class StateService:
	def __init__(self, store: GameStore | None = None) -> None:
		self._store = store or default_store

	async def load(self, post_id: str, username: str) -> Optional[StoredState]:
		raw = await self._store.get(state_key(post_id, username))
		if not raw:
			return None
		return StoredState.loads(raw)

	async def save(self, post_id: str, state: StoredState) -> None:
		await self._store.set(state_key(post_id, state.username), state.dumps())

	async def get(self, ctx: RequestContext) -> StoredState:
		post_id = ctx.require_post()
		state = await self.load(post_id, ctx.effective_username)
		if state is None:
			raise StateNotFound()
		logger.info("state_fetched", extra={"post_id": post_id, "username": state.username})
		return state

	async def put(self, ctx: RequestContext, data: Any = _MISSING) -> StoredState:
		"""Replace the caller's progress blob.

		Leaving `data` out keeps the previous blob; `bestScore` is always
		carried over untouched since only score submission may change it.
		"""
		post_id = ctx.require_post()
		if ctx.is_anonymous:
			raise LoginRequired()
		if data is not _MISSING and not isinstance(data, dict):
			raise StateValidationError()

		username = ctx.effective_username
		previous = await self.load(post_id, username)
		next_state = StoredState(
			username=username,
			updated_at=clock.now_ms(),
			data=data if data is not _MISSING else (previous.data if previous else None),
			best_score=previous.best_score if previous else None,
		)
		await self.save(post_id, next_state)
		metrics.inc_state_write("put")
		logger.info("state_saved", extra={"post_id": post_id, "username": username})
		return next_state
