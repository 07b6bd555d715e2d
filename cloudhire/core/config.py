# cloudhire/core/config.py
from typing import Optional
from pydantic import AnyUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Record store: 'memory' (dev/tests) or 'dynamodb'
    STORE_BACKEND: str = "memory"
    TABLE_NAME: str = "CloudHireJobs"
    # Partition-key attribute declared on the table. Records always expose
    # a single `id`; the DynamoDB adapter renames it to this attribute.
    TABLE_KEY_ATTRIBUTE: str = "id"
    AWS_REGION: Optional[str] = None
    # local DynamoDB (e.g. http://localhost:8000)
    DYNAMODB_ENDPOINT: Optional[str] = None
    # Reject create when the id already exists instead of overwriting
    STRICT_CREATE: bool = False

    # S3 (CV uploads)
    S3_BUCKET: Optional[str] = None
    S3_REGION: Optional[str] = None
    S3_ENDPOINT: Optional[AnyUrl] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None
    CV_MAX_BYTES: int = 5 * 1024 * 1024
    PRESIGN_EXPIRES: int = 15 * 60

    # Auth: tokens are issued by the external identity provider. When
    # AUTH_REQUIRED is false the gateway authorizer is trusted.
    AUTH_REQUIRED: bool = False
    SECRET_KEY: str = "change-me"  # override in .env / secrets
    JWT_ALGORITHM: str = "HS256"

    # Pydantic v2 settings: read from .env file
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class ClientSettings(BaseSettings):
    """
    Settings for JobServiceClient, read from CLOUDHIRE_* env vars.
    Fixture behaviour is opt-in: nothing here is switched on implicitly
    except fixture mode when no API_BASE_URL is configured at all.
    """
    API_BASE_URL: Optional[str] = None
    USE_FIXTURES: bool = False
    FALLBACK_TO_FIXTURES: bool = False
    TIMEOUT_SEC: float = 15.0

    model_config = SettingsConfigDict(env_prefix="CLOUDHIRE_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

# single shared settings instance
settings = Settings()
