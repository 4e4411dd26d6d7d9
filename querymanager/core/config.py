from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from querymanager.engines.query.config import QueryManagerConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "querymanager"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Overrides QueryManagerConfig.template_location when set
    QUERY_TEMPLATE_LOCATION: str | None = None
    # Optional JSON file with a "QueryManager" section
    QUERY_MANAGER_CONFIG_FILE: str | None = None

    def query_manager_config(self) -> QueryManagerConfig:
        """Effective engine configuration for this environment."""
        if self.QUERY_MANAGER_CONFIG_FILE:
            cfg = QueryManagerConfig.from_json_file(self.QUERY_MANAGER_CONFIG_FILE)
        else:
            cfg = QueryManagerConfig()
        if self.QUERY_TEMPLATE_LOCATION:
            cfg = cfg.model_copy(update={"template_location": Path(self.QUERY_TEMPLATE_LOCATION)})
        return cfg


settings = Settings()  # type: ignore
