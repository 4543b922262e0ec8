"""Relay configuration."""
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class RelayConfig(BaseModel):
    """Upstream webhook coordinates handed to the relay handler."""
    upstream_url: Optional[str] = None
    shared_secret: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.upstream_url) and bool(self.shared_secret)


class Settings(BaseSettings):
    """Application settings read from the environment (or .env)."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Apps Script webhook (both required; relay answers 500 without them)
    SHEETS_WEBHOOK_URL: Optional[str] = None
    SHEETS_SECRET: Optional[str] = None
    
    # None disables the client timeout; the hosting platform bounds the call
    UPSTREAM_TIMEOUT_SEC: Optional[float] = None
    
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    def relay_config(self) -> RelayConfig:
        return RelayConfig(
            upstream_url=self.SHEETS_WEBHOOK_URL,
            shared_secret=self.SHEETS_SECRET,
        )


# Global settings instance
settings = Settings()
