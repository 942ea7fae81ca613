"""Domain-level exceptions shared by the score, state and post services."""

from __future__ import annotations


class GameError(Exception):
	"""Base class for errors surfaced to API callers."""

	reason: str = "Request failed"
	status_code: int = 400

	def __init__(self, reason: str | None = None) -> None:
		super().__init__(reason or self.reason)
		if reason:
			self.reason = reason


class ValidationFailed(GameError):
	reason = "Invalid request"


class ScoreValidationError(ValidationFailed):
	reason = "Invalid score"


class StateValidationError(ValidationFailed):
	reason = "data must be an object"


class LoginRequired(GameError):
	reason = "Login required"
	status_code = 401


class MissingContextError(GameError):
	reason = "Missing postId in context"


class StateNotFound(GameError):
	reason = "No state found"
	status_code = 404


class PostCreationFailed(GameError):
	reason = "Failed to create post"
