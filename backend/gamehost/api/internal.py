"""Platform lifecycle hooks (app install, moderator menu)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from gamehost.domain.common.errors import PostCreationFailed
from gamehost.domain.posts.service import PostService
from gamehost.infra.platform import RequestContext, get_request_context

router = APIRouter(prefix="/internal", tags=["internal"])

_service = PostService()


def _failure(exc: PostCreationFailed) -> JSONResponse:
	return JSONResponse(
		status_code=status.HTTP_400_BAD_REQUEST,
		content={"status": "error", "message": exc.reason},
	)


@router.post("/on-app-install")
async def on_app_install(ctx: RequestContext = Depends(get_request_context)) -> JSONResponse:
	try:
		post = await _service.create_post(ctx, trigger="app_install")
	except PostCreationFailed as exc:
		return _failure(exc)
	return JSONResponse(
		content={
			"status": "success",
			"message": f"Post created in subreddit {post.subreddit_name} with id {post.id}",
		}
	)


@router.post("/menu/post-create")
async def menu_post_create(ctx: RequestContext = Depends(get_request_context)) -> JSONResponse:
	try:
		post = await _service.create_post(ctx, trigger="menu")
	except PostCreationFailed as exc:
		return _failure(exc)
	return JSONResponse(content={"navigateTo": PostService.post_url(post)})
