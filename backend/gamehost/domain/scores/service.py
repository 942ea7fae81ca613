"""Service layer for score submission and leaderboards."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Optional

from gamehost.domain.common import clock
from gamehost.domain.common.errors import LoginRequired, ScoreValidationError
from gamehost.domain.scores.models import (
	NO_SCORE,
	LeaderboardEntry,
	LeaderboardResult,
	Number,
	ScoreResult,
	as_number,
	daily_leaderboard_key,
	descending_rank,
	leaderboard_key,
)
from gamehost.domain.state.models import StoredState
from gamehost.domain.state.service import StateService
from gamehost.infra.platform import RequestContext
from gamehost.infra.store import GameStore, store as default_store
from gamehost.obs import metrics
from gamehost.settings import settings

logger = logging.getLogger(__name__)


def sanitize_score(raw: Any) -> Number:
	"""Validate a submitted score and clamp it into [0, max_score]."""
	# bool is an int subclass but never a score
	if isinstance(raw, bool) or not isinstance(raw, (int, float)):
		raise ScoreValidationError()
	try:
		finite = math.isfinite(raw)
	except OverflowError:
		# integers beyond float range count as infinite
		finite = False
	if not finite:
		raise ScoreValidationError()
	return as_number(max(0, min(raw, settings.max_score)))


def parse_limit(raw: Optional[str], *, default: Optional[int] = None, maximum: Optional[int] = None) -> int:
	"""Parse the `limit` query value; junk falls back to the default."""
	default = settings.leaderboard_default_limit if default is None else default
	maximum = settings.leaderboard_max_limit if maximum is None else maximum
	if raw is None or not str(raw).strip():
		return default
	try:
		value = float(raw)
	except (TypeError, ValueError):
		return default
	if not math.isfinite(value):
		return default
	return int(max(1, min(value, maximum)))


class ScoreService:
	"""Maintains the global and daily leaderboards of each post."""

	def __init__(self, store: GameStore | None = None, states: StateService | None = None) -> None:
		self._store = store or default_store
		self._states = states or StateService(self._store)

	async def submit(self, ctx: RequestContext, raw_score: Any) -> ScoreResult:
		post_id = ctx.require_post()
		if ctx.is_anonymous:
			raise LoginRequired()
		try:
			sanitized = sanitize_score(raw_score)
		except ScoreValidationError:
			metrics.inc_score_submission("invalid")
			raise

		username = ctx.effective_username
		day = clock.utc_day_label()
		global_key = leaderboard_key(post_id)
		daily_key = daily_leaderboard_key(post_id, day)

		existing_global, existing_daily = await asyncio.gather(
			self._store.zscore(global_key, username),
			self._store.zscore(daily_key, username),
		)
		global_score = existing_global if existing_global is not None else NO_SCORE
		daily_score = existing_daily if existing_daily is not None else NO_SCORE

		best_global = as_number(max(global_score, sanitized))
		best_daily = as_number(max(daily_score, sanitized))
		is_new_best = sanitized > global_score

		await asyncio.gather(
			self._store.zadd_max(global_key, username, best_global),
			self._store.zadd_max(daily_key, username, best_daily),
		)

		# Mirror into the state blob; not atomic with the upserts above
		previous = await self._states.load(post_id, username)
		merged = dict(previous.data or {}) if previous else {}
		merged["date"] = day
		next_state = StoredState(
			username=username,
			updated_at=clock.now_ms(),
			best_score=best_global,
			data=merged,
		)
		await self._states.save(post_id, next_state)
		metrics.inc_state_write("score")

		ascending = await self._store.zrank(global_key, username)
		total_players = await self._store.zcard(global_key)
		rank = descending_rank(total_players, ascending) or 0

		result = ScoreResult(
			score=best_global,
			rank=rank,
			total_players=total_players,
			is_new_best=is_new_best,
			updated_at=next_state.updated_at,
			date_bucket=day,
		)
		metrics.inc_score_submission("new_best" if is_new_best else "kept")
		logger.info(
			"score_submitted",
			extra={
				"post_id": post_id,
				"username": username,
				"score": best_global,
				"rank": rank,
				"new_best": is_new_best,
				"date_bucket": day,
			},
		)
		return result

	async def query(
		self,
		ctx: RequestContext,
		*,
		limit: Optional[int] = None,
		date: Optional[str] = None,
	) -> LeaderboardResult:
		"""Top `limit` players of one daily bucket plus the caller's own row.

		`date` defaults to today (UTC). `totalPlayers` counts the queried
		bucket, unlike `submit` which reports the all-time set.
		"""
		post_id = ctx.require_post()
		if limit is None:
			limit = settings.leaderboard_default_limit
		limit = max(1, min(int(limit), settings.leaderboard_max_limit))
		if date is not None and not clock.is_day_label(date):
			raise ScoreValidationError("Invalid date")
		effective_date = date or clock.utc_day_label()
		key = daily_leaderboard_key(post_id, effective_date)

		items = await self._store.zrevrange(key, 0, limit - 1)
		top = [
			LeaderboardEntry(rank=idx + 1, username=member, score=as_number(score), date=effective_date)
			for idx, (member, score) in enumerate(items)
		]

		username = ctx.effective_username
		ascending = await self._store.zrank(key, username)
		total = await self._store.zcard(key)
		me: Optional[LeaderboardEntry] = None
		my_rank = descending_rank(total, ascending) if total else None
		if my_rank is not None:
			my_score = await self._store.zscore(key, username)
			me = LeaderboardEntry(
				rank=my_rank,
				username=username,
				score=as_number(my_score if my_score is not None else 0),
				date=effective_date,
			)

		return LeaderboardResult(
			top=top,
			me=me,
			total_players=total,
			generated_at=clock.now_ms(),
			filter_date=effective_date,
		)
