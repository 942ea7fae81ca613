"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from gamehost.api import game, internal, ops
from gamehost.api.errors import install_error_handlers
from gamehost.infra.redis import redis_client
from gamehost.obs import init as obs_init
from gamehost.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info("startup", extra={"environment": settings.environment})
	try:
		yield
	finally:
		await redis_client.aclose()


app = FastAPI(title="Game Host API", lifespan=lifespan)
install_error_handlers(app)

allow_origins = list(getattr(settings, "cors_allow_origins", []))
if not allow_origins and settings.is_dev():
	allow_origins = ["http://localhost:5173", "http://127.0.0.1:5173"]

if allow_origins:
	app.add_middleware(
		CORSMiddleware,
		allow_origins=allow_origins,
		allow_credentials="*" not in allow_origins,
		allow_methods=["GET", "POST", "OPTIONS"],
		allow_headers=["*"],
	)

obs_init(app)

app.include_router(game.router)
app.include_router(internal.router)
app.include_router(ops.router)


def run() -> None:
	uvicorn.run("gamehost.main:app", host=settings.host, port=settings.port)
