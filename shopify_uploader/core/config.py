from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlatformSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    store_domain: str
    access_token: str
    api_version: str = "2025-04"
    poll_attempts: int = Field(default=30, ge=1)
    poll_interval_seconds: float = Field(default=1.0, ge=0)
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    @property
    def graphql_url(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}/graphql.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    shopify_store_domain: str = Field(alias="SHOPIFY_STORE_DOMAIN", min_length=1)
    shopify_admin_token: str = Field(alias="SHOPIFY_ADMIN_TOKEN", min_length=1)
    shopify_api_version: str = Field(default="2025-04", alias="SHOPIFY_API_VERSION")
    poll_attempts: int = Field(default=30, ge=1, alias="POLL_ATTEMPTS")
    poll_interval_seconds: float = Field(default=1.0, ge=0, alias="POLL_INTERVAL_SECONDS")
    http_timeout_seconds: float = Field(default=30.0, gt=0, alias="HTTP_TIMEOUT_SECONDS")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=3000, alias="PORT")

    def platform(self) -> PlatformSettings:
        return PlatformSettings(
            store_domain=self.shopify_store_domain,
            access_token=self.shopify_admin_token,
            api_version=self.shopify_api_version,
            poll_attempts=self.poll_attempts,
            poll_interval_seconds=self.poll_interval_seconds,
            http_timeout_seconds=self.http_timeout_seconds,
        )

    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
