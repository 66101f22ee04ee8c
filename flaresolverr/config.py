"""Client configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # FlareSolverr endpoint
    base_url: str = "http://127.0.0.1:8191/v1"
    timeout_seconds: float = 60

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(env_prefix="FLARESOLVERR_", env_file=".env")


settings = Settings()
