"""Pydantic schemas for the score and leaderboard APIs."""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gamehost.domain.scores.models import LeaderboardEntry, LeaderboardResult, ScoreResult


class ScoreSubmitRequest(BaseModel):
	"""Body of POST /api/score; `score` is checked by the service, not here."""

	model_config = ConfigDict(extra="ignore")

	score: Any = None

	@classmethod
	def from_body(cls, body: Any) -> "ScoreSubmitRequest":
		"""Any JSON body is accepted; non-objects read as a missing score."""
		if isinstance(body, dict):
			return cls.model_validate(body)
		return cls()


class ScoreSubmitResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	success: bool = True
	score: Union[int, float]
	rank: int
	total_players: int = Field(..., alias="totalPlayers")
	is_new_best: bool = Field(..., alias="isNewBest")
	updated_at: int = Field(..., alias="updatedAt")
	date_bucket: str = Field(..., alias="dateBucket")

	@classmethod
	def from_result(cls, result: ScoreResult) -> "ScoreSubmitResponse":
		return cls(
			score=result.score,
			rank=result.rank,
			total_players=result.total_players,
			is_new_best=result.is_new_best,
			updated_at=result.updated_at,
			date_bucket=result.date_bucket,
		)


class LeaderboardRowSchema(BaseModel):
	rank: int = Field(..., ge=1)
	username: str
	score: Union[int, float]
	date: str

	@classmethod
	def from_entry(cls, entry: LeaderboardEntry) -> "LeaderboardRowSchema":
		return cls(rank=entry.rank, username=entry.username, score=entry.score, date=entry.date)


class LeaderboardResponseSchema(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	top: List[LeaderboardRowSchema]
	me: Optional[LeaderboardRowSchema] = None
	total_players: int = Field(..., alias="totalPlayers")
	generated_at: int = Field(..., alias="generatedAt")
	filter_date: str = Field(..., alias="filterDate")

	@classmethod
	def from_result(cls, result: LeaderboardResult) -> "LeaderboardResponseSchema":
		return cls(
			top=[LeaderboardRowSchema.from_entry(entry) for entry in result.top],
			me=LeaderboardRowSchema.from_entry(result.me) if result.me else None,
			total_players=result.total_players,
			generated_at=result.generated_at,
			filter_date=result.filter_date,
		)
