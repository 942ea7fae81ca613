"""Global error handlers mapping domain failures onto `{error}` JSON bodies."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gamehost.domain.common.errors import GameError
from gamehost.obs.logging import current_request_id

logger = logging.getLogger(__name__)


class UpstreamError(GameError):
	"""A store or collaborator call failed while serving the request."""

	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def upstream_errors(message: str) -> Iterator[None]:
	"""Convert unexpected failures inside a handler into a 500 with `message`."""
	try:
		yield
	except (GameError, StarletteHTTPException):
		raise
	except Exception as exc:
		logger.exception(message)
		raise UpstreamError(message) from exc


def _error_response(status_code: int, message: str) -> JSONResponse:
	headers = {}
	rid = current_request_id()
	if rid:
		headers["X-Request-Id"] = rid
	return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def install_error_handlers(app: FastAPI) -> None:
	@app.exception_handler(GameError)
	async def game_exc_handler(request: Request, exc: GameError):  # type: ignore[override]
		if exc.status_code < 500:
			logger.warning(
				"request_rejected",
				extra={"path": request.url.path, "status": exc.status_code, "reason": exc.reason},
			)
		return _error_response(exc.status_code, exc.reason)

	@app.exception_handler(StarletteHTTPException)
	async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
		return _error_response(exc.status_code, str(exc.detail))

	@app.exception_handler(RequestValidationError)
	async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
		logger.warning("invalid_request_body", extra={"path": request.url.path})
		return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")
