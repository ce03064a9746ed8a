"""Settings for the admin console backend."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
	if env_names:
		alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
		return Field(default=default, validation_alias=alias)
	return Field(default=default)


class Settings(BaseSettings):
	postgres_url: Optional[str] = _env_field(None, "POSTGRES_URL", "DATABASE_URL")
	db_host: str = _env_field("localhost", "DB_HOST")
	db_port: int = _env_field(5432, "DB_PORT")
	db_name: str = _env_field("admin_panel", "DB_NAME")
	db_user: str = _env_field("postgres", "DB_USER")
	db_password: str = _env_field("password", "DB_PASSWORD")
	db_ssl: bool = _env_field(False, "DB_SSL")
	postgres_min_pool_size: int = _env_field(1, "POSTGRES_MIN_POOL_SIZE")
	postgres_max_pool_size: int = _env_field(20, "POSTGRES_MAX_POOL_SIZE")
	# Idle connections are closed after this many seconds
	postgres_idle_timeout_seconds: float = _env_field(30.0, "POSTGRES_IDLE_TIMEOUT_SECONDS")
	postgres_connect_timeout_seconds: float = _env_field(2.0, "POSTGRES_CONNECT_TIMEOUT_SECONDS")
	seed_on_startup: bool = _env_field(True, "SEED_ON_STARTUP")
	seed_password: str = _env_field("changeme123", "SEED_PASSWORD")

	environment: str = _env_field("development", "ENV", "APP_ENV", "ENVIRONMENT")
	service_name: str = _env_field("admin-console-api", "SERVICE_NAME")
	git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA", "SOURCE_VERSION")
	obs_enabled: bool = _env_field(True, "OBS_ENABLED")
	obs_metrics_public: bool = _env_field(True, "OBS_METRICS_PUBLIC")
	obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
	ping_message: str = _env_field("ping", "PING_MESSAGE")
	cors_allow_origins: Any = _env_field((), "CORS_ALLOW_ORIGINS")

	model_config = SettingsConfigDict(
		env_prefix="",
		env_file=".env",
		case_sensitive=False,
		populate_by_name=True,
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

	def dsn(self) -> str:
		"""Connection string, built from the discrete DB_* knobs when no URL is set."""
		if self.postgres_url:
			return self.postgres_url
		user = quote(self.db_user, safe="")
		password = quote(self.db_password, safe="")
		return f"postgresql://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

	def is_dev(self) -> bool:
		return self.environment.lower() in ("dev", "development")


settings = Settings()
