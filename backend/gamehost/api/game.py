"""FastAPI routes the game runtime calls: init, state, score and leaderboard."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from gamehost.api.errors import upstream_errors
from gamehost.domain.scores.schemas import (
	LeaderboardResponseSchema,
	ScoreSubmitRequest,
	ScoreSubmitResponse,
)
from gamehost.domain.scores.service import ScoreService, parse_limit
from gamehost.domain.state.service import StateService
from gamehost.infra.platform import RequestContext, get_request_context
from gamehost.settings import optional_str

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["game"])

_state_service = StateService()
_score_service = ScoreService(states=_state_service)


class StateUpdateRequest(BaseModel):
	model_config = ConfigDict(extra="ignore")

	data: Any = None


@router.get("/init")
async def init_endpoint(ctx: RequestContext = Depends(get_request_context)) -> JSONResponse:
	if not ctx.post_id:
		logger.error("init_missing_post")
		return JSONResponse(
			status_code=status.HTTP_400_BAD_REQUEST,
			content={"status": "error", "message": "postId is required but missing from context"},
		)
	return JSONResponse(content={"type": "init", "postId": ctx.post_id, "username": ctx.effective_username})


@router.get("/state")
async def get_state_endpoint(ctx: RequestContext = Depends(get_request_context)) -> dict:
	with upstream_errors("Failed to fetch state"):
		state = await _state_service.get(ctx)
	return state.to_payload()


@router.post("/state")
async def put_state_endpoint(
	payload: Optional[StateUpdateRequest] = Body(default=None),
	ctx: RequestContext = Depends(get_request_context),
) -> dict:
	with upstream_errors("Failed to save state"):
		if payload is not None and "data" in payload.model_fields_set:
			state = await _state_service.put(ctx, payload.data)
		else:
			state = await _state_service.put(ctx)
	return state.to_payload()


@router.post("/score", response_model=ScoreSubmitResponse)
async def submit_score_endpoint(
	body: Any = Body(default=None),
	ctx: RequestContext = Depends(get_request_context),
) -> ScoreSubmitResponse:
	payload = ScoreSubmitRequest.from_body(body)
	with upstream_errors("Failed to submit score"):
		result = await _score_service.submit(ctx, payload.score)
	return ScoreSubmitResponse.from_result(result)


@router.get("/leaderboard", response_model=LeaderboardResponseSchema)
async def leaderboard_endpoint(
	limit: Optional[str] = Query(default=None, description="Rows to return, clamped to 1..100"),
	date: Optional[str] = Query(default=None, description="UTC day in YYYYMMDD; defaults to today"),
	ctx: RequestContext = Depends(get_request_context),
) -> LeaderboardResponseSchema:
	with upstream_errors("Failed to fetch leaderboard"):
		result = await _score_service.query(ctx, limit=parse_limit(limit), date=optional_str(date))
	return LeaderboardResponseSchema.from_result(result)
