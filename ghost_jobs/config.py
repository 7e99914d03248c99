from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


load_dotenv()


class Settings(BaseSettings):
    environment: str = Field("development", alias="ENVIRONMENT")
    debug: bool = Field(False, alias="DEBUG")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT")
    request_timeout_seconds: float = Field(7.0, alias="REQUEST_TIMEOUT_SECONDS")
    fetch_user_agent: str = Field("GhostJobChecker/1.0", alias="FETCH_USER_AGENT")
    cors_allow_origins: str = Field("*", alias="CORS_ALLOW_ORIGINS")
    scoring_config_path: str | None = Field(None, alias="SCORING_CONFIG_PATH")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def cors_allow_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings: Settings = get_settings()
