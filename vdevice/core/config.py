"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings loaded from environment variables."""

    debug: bool = False
    log_level: str = "INFO"

    # Raise on device payloads naming an unregistered kind instead of
    # treating them as generic devices.
    strict_kinds: bool = False

    model_config = SettingsConfigDict(
        env_prefix="VDEVICE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def get_log_level(self) -> str:
        """Effective log level name; debug mode always logs at DEBUG."""
        if self.debug:
            return "DEBUG"
        return self.log_level.strip().upper() or "INFO"


settings = Settings()
