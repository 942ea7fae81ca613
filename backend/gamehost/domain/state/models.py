"""Per-user, per-post persisted game state."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def state_key(post_id: str, username: str) -> str:
	return f"state:{post_id}:{username}"


class StoredState(BaseModel):
	"""Progress blob plus the mirrored global best score.

	Optional fields are left out of the serialized form when unset, so a
	state that never saw a score has no `bestScore` key at all.
	"""

	model_config = ConfigDict(populate_by_name=True)

	username: str
	best_score: Optional[Union[int, float]] = Field(default=None, alias="bestScore")
	data: Optional[Dict[str, Any]] = None
	updated_at: int = Field(..., alias="updatedAt")

	def to_payload(self) -> Dict[str, Any]:
		# built by hand: exclude_none would also strip nulls inside `data`
		payload: Dict[str, Any] = {"username": self.username, "updatedAt": self.updated_at}
		if self.data is not None:
			payload["data"] = self.data
		if self.best_score is not None:
			payload["bestScore"] = self.best_score
		return payload

	def dumps(self) -> str:
		return json.dumps(self.to_payload(), separators=(",", ":"))

	@classmethod
	def loads(cls, raw: str) -> "StoredState":
		return cls.model_validate_json(raw)
