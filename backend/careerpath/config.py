from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/careerpath.db"
    app_password: str = "changeme"
    secret_key: str = "dev-secret-key-change-in-production"
    session_days: int = 30
    log_level: str = "INFO"

    cors_origins: list[str] = ["http://localhost:5000", "http://localhost:3000"]

    # Upper bound for a single API request; the store call is not retried
    request_timeout_seconds: float = 15.0

    # Recommendation generation: "random" or "skill_overlap"
    recommendation_strategy: str = "random"
    recommendation_limit: int = 5
    recommended_course_limit: int = 10

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
