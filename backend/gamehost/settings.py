"""Settings for the hosted game backend."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
	if env_names:
		alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
		return Field(default=default, validation_alias=alias)
	return Field(default=default)


class Settings(BaseSettings):
	redis_url: str = _env_field("redis://localhost:6379/0", "REDIS_URL")
	host: str = _env_field("0.0.0.0", "HOST")
	port: int = _env_field(3000, "PORT")

	environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
	service_name: str = _env_field("gamehost-api", "SERVICE_NAME")
	git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA", "SOURCE_VERSION")
	obs_enabled: bool = _env_field(True, "OBS_ENABLED")
	obs_metrics_public: bool = _env_field(True, "OBS_METRICS_PUBLIC")
	obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
	obs_log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")

	cors_allow_origins: Any = _env_field((), "CORS_ALLOW_ORIGINS")

	# Headers the hosting platform sets on every proxied request
	platform_post_header: str = _env_field("devvit-post-id", "PLATFORM_POST_HEADER")
	platform_subreddit_header: str = _env_field("devvit-subreddit-name", "PLATFORM_SUBREDDIT_HEADER")
	platform_user_header: str = _env_field("devvit-user-name", "PLATFORM_USER_HEADER")

	post_title: str = _env_field("Play the game", "POST_TITLE")
	post_url_base: str = _env_field("https://reddit.com", "POST_URL_BASE")

	leaderboard_default_limit: int = _env_field(10, "LEADERBOARD_DEFAULT_LIMIT")
	leaderboard_max_limit: int = _env_field(100, "LEADERBOARD_MAX_LIMIT")
	max_score: float = _env_field(1_000_000_000, "MAX_SCORE")

	def is_dev(self) -> bool:
		return self.environment.lower() in ("dev", "development")

	model_config = SettingsConfigDict(
		env_prefix="",
		env_file=".env",
		case_sensitive=False,
		extra="ignore",
	)

	@field_validator("cors_allow_origins", mode="before")
	def _split_cors(cls, value):  # type: ignore[override]
		if value in (None, ""):
			return ()
		if isinstance(value, str):
			return tuple(part.strip() for part in value.split(",") if part.strip())
		if isinstance(value, (list, tuple, set)):
			return tuple(str(item).strip() for item in value if str(item).strip())
		return ()

	@field_validator("obs_log_level", mode="after")
	def _normalise_level(cls, value: str) -> str:  # type: ignore[override]
		return value.upper()


settings = Settings()


def optional_str(value: Optional[str]) -> Optional[str]:
	"""Strip a header value, mapping blanks to None."""
	if value is None:
		return None
	value = value.strip()
	return value or None
