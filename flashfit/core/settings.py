# flashfit/core/settings.py
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

env_path = Path(__file__).resolve().parent.parent.parent / ".env"
# boto3 reads AWS_* straight from the process environment
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./flashfit.db"

    SECRET_KEY: str = "flashfit-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["*"]
    ADMIN_EMAILS: list[str] = []

    REDIS_URL: str | None = None
    EXERCISE_CACHE_TTL_SECONDS: int = 3600

    AWS_REGION: str = "il-central-1"
    SNS_TOPIC_EVENTS_ARN: str | None = None
    # set for localstack and similar; None means the regional AWS endpoint
    SNS_ENDPOINT_URL: str | None = None

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    model_config = SettingsConfigDict(
        env_file=env_path,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
