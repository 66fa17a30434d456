from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # infra
    app_name: str = "ethrpg_arena"
    environment: str = Field("dev", alias="APP_ENV", description="dev|stage|prod")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # cache
    redis_url: str | None = Field(None, alias="REDIS_URL")
    battle_cache_ttl_seconds: int = Field(24 * 60 * 60, alias="BATTLE_CACHE_TTL_SECONDS")
    battle_cache_max_entries: int = Field(5_000, alias="BATTLE_CACHE_MAX_ENTRIES")
    battle_cache_eviction_batch: int = Field(500, alias="BATTLE_CACHE_EVICTION_BATCH")

    # networking
    public_base_url: AnyHttpUrl = Field("http://localhost:3000", alias="PUBLIC_BASE_URL")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: str | None) -> str:
        if not v:
            return "INFO"
        return str(v).strip().upper()

    @field_validator("redis_url", mode="before")
    @classmethod
    def _blank_redis_url(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def site_url(self) -> str:
        """Public base URL without the trailing slash pydantic adds."""
        return str(self.public_base_url).rstrip("/")


settings = Settings()
