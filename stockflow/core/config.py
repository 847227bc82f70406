import json
from typing import List, Union
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "StockFlow API"
    env: str = "dev"

    # DATABASE
    database_url: str = "sqlite:///./stockflow.db"
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=20, ge=0, le=200)
    db_pool_timeout_seconds: int = Field(default=30, ge=1, le=300)
    db_pool_recycle_seconds: int = Field(default=1800, ge=30, le=86_400)
    db_statement_timeout_ms: int = Field(default=5000, ge=100, le=300_000)
    db_echo: bool = False

    # INVENTORY
    inventory_log_retention_days: int = Field(default=730, ge=1)
    stock_adjust_max_attempts: int = Field(default=3, ge=1, le=20)
    store_retry_after_seconds: int = Field(default=1, ge=1, le=300)
    api_timeout_hint_ms: int = Field(default=30000, ge=1000, le=1_800_000)

    # CORS
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    cors_origin_regex: str | None = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            if not v.strip():
                return []
            if v.startswith("["):
                parsed = json.loads(v)
                if not isinstance(parsed, list):
                    raise ValueError("CORS_ORIGINS JSON value must be a list")
                return [str(i).strip() for i in parsed if str(i).strip()]
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return [str(i).strip() for i in v if str(i).strip()]
        raise ValueError(v)

    @field_validator("cors_origin_regex", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @model_validator(mode="after")
    def validate_production_safety(self) -> "Settings":
        env_value = self.env.lower().strip()
        if env_value not in {"prod", "production"}:
            return self

        if self.database_url.lower().startswith("sqlite"):
            raise ValueError("DATABASE_URL must point at a networked database in production")
        if "*" in self.cors_origins:
            raise ValueError("CORS_ORIGINS cannot contain '*' in production")
        if self.cors_origin_regex:
            raise ValueError("CORS_ORIGIN_REGEX cannot be set in production")

        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.lower().startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        enable_decoding=False,
    )


settings = Settings()
