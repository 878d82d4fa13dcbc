from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


# Firestore rejects write batches with more than 500 operations
MAX_BATCH_OPERATIONS = 500


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "Tenant Admin Operations"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Firebase
    firebase_project_id: Optional[str] = None
    firebase_credentials_path: Optional[str] = None  # service account JSON, ADC when unset
    firestore_emulator_host: Optional[str] = None  # ví dụ: localhost:8080

    # Collections
    organizations_collection: str = "organizations"
    users_subcollection: str = "users"

    # Migration
    migration_batch_size: int = MAX_BATCH_OPERATIONS
    firestore_page_size: int = 1000

    # CORS
    cors_origins: str = "*"

    # Email (SES). Credentials come from the environment only
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    ses_from_email: str = "noreply@example.com"
    frontend_url: str = "http://localhost:3000"
    reminder_subject: str = "Reminder from your organization"

    @field_validator("migration_batch_size")
    @classmethod
    def _check_batch_size(cls, value: int) -> int:
        if value < 1 or value > MAX_BATCH_OPERATIONS:
            raise ValueError(f"migration_batch_size must be between 1 and {MAX_BATCH_OPERATIONS}")
        return value

    @field_validator("firestore_page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("firestore_page_size must be positive")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
