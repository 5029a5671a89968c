from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3001, validation_alias="PORT")

    # CORS: comma-separated origins, "*" allows any origin.
    cors_allow_origins: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGINS")

    # AWS / data
    aws_region: str = Field(default="eu-central-1", validation_alias="AWS_REGION")
    # Point at DynamoDB Local (e.g. http://localhost:8000) during development.
    ddb_endpoint_url: str | None = Field(default=None, validation_alias="DDB_ENDPOINT_URL")
    # Per-call `Limit` sent with ExecuteStatement (items evaluated per page).
    ddb_statement_limit: int = Field(default=1000, validation_alias="DDB_STATEMENT_LIMIT")

    # Pagination bound used when the caller sends no usable maxPageSize.
    default_max_pages: int = Field(default=10, validation_alias="DEFAULT_MAX_PAGES")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    def require_valid(self) -> None:
        """
        Reject configurations that would make every query fail in a confusing way.
        """
        problems: list[str] = []

        if not str(self.aws_region or "").strip():
            problems.append("AWS_REGION must not be empty")
        if int(self.ddb_statement_limit) < 1:
            problems.append("DDB_STATEMENT_LIMIT must be >= 1")
        if int(self.default_max_pages) < 0:
            problems.append("DEFAULT_MAX_PAGES must be >= 0")

        if problems:
            raise RuntimeError("Invalid configuration: " + "; ".join(problems))

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A redacted representation safe for structured logs / diagnostics.
        """
        return {
            "environment": self.normalized_environment,
            "host": self.host,
            "port": self.port,
            "cors_allow_origins": self.cors_allow_origins,
            "aws": {
                "aws_region": self.aws_region,
                "ddb_endpoint_url": self.ddb_endpoint_url,
                "ddb_statement_limit": self.ddb_statement_limit,
            },
            "default_max_pages": self.default_max_pages,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()
    s.require_valid()
    return s


# Module-level singleton.
settings = get_settings()
