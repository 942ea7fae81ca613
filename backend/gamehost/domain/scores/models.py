"""Domain models and key layout for scores & leaderboards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]

# Absent sorted-set entries compare as -1 so any accepted score beats them
NO_SCORE: Number = -1


def leaderboard_key(post_id: str) -> str:
	return f"lb:{post_id}"


def daily_leaderboard_key(post_id: str, day: str) -> str:
	return f"lb:{post_id}:{day}"


def descending_rank(total: int, ascending_rank: Optional[int]) -> Optional[int]:
	"""Turn a 0-indexed ascending rank into a 1-indexed best-first rank."""
	if ascending_rank is None:
		return None
	return total - ascending_rank


def as_number(value: Number) -> Number:
	"""Collapse integral floats (Redis returns every score as float) to int."""
	if isinstance(value, float) and value.is_integer():
		return int(value)
	return value


@dataclass(slots=True)
class ScoreResult:
	score: Number
	rank: int
	total_players: int
	is_new_best: bool
	updated_at: int
	date_bucket: str


@dataclass(slots=True)
class LeaderboardEntry:
	rank: int
	username: str
	score: Number
	date: str


@dataclass(slots=True)
class LeaderboardResult:
	top: list[LeaderboardEntry]
	me: Optional[LeaderboardEntry]
	total_players: int
	generated_at: int
	filter_date: str
