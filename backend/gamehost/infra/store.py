"""Narrow key-value and sorted-set store used by the game services.

Services only see this surface, so the backing client stays swappable: the
default instance forwards to the shared Redis proxy, tests point the proxy at
fakeredis.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from gamehost.infra.redis import RedisProxy, redis_client


class GameStore:
	"""String blobs plus score-ordered sets, keyed by plain strings."""

	def __init__(self, client: RedisProxy | None = None) -> None:
		self._redis = client if client is not None else redis_client

	async def get(self, key: str) -> Optional[str]:
		return await self._redis.get(key)

	async def set(self, key: str, value: str) -> None:
		await self._redis.set(key, value)

	async def append(self, key: str, value: str) -> int:
		return int(await self._redis.rpush(key, value))

	async def zscore(self, key: str, member: str) -> Optional[float]:
		score = await self._redis.zscore(key, member)
		return float(score) if score is not None else None

	async def zadd_max(self, key: str, member: str, score: float) -> None:
		"""Upsert `member`, keeping the higher of the stored and given score."""
		# ZADD GT still inserts new members, it only refuses to lower existing ones
		await self._redis.zadd(key, {member: score}, gt=True)

	async def zrank(self, key: str, member: str) -> Optional[int]:
		"""Ascending 0-indexed rank, or None when the member is absent."""
		rank = await self._redis.zrank(key, member)
		return int(rank) if rank is not None else None

	async def zrevrange(self, key: str, start: int, stop: int) -> List[Tuple[str, float]]:
		"""Members ordered by descending score, inclusive of both bounds."""
		items = await self._redis.zrevrange(key, start, stop, withscores=True)
		return [(str(member), float(score)) for member, score in items]

	async def zcard(self, key: str) -> int:
		return int(await self._redis.zcard(key) or 0)

	async def ping(self) -> bool:
		return bool(await self._redis.ping())


store = GameStore()
