"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database paths
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

    @property
    def diagnostics_db_path(self) -> str:
        return os.path.join(self.data_path, "diagnostics.db")

    # Context assembly
    word_budget: int = 2000
    top_facts_limit: int = 10

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    class Config:
        env_prefix = "PAWSY_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
