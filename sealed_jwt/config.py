# sealed_jwt/config.py
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Rev tenant, only used to build share links
    rev_url: Optional[str] = Field(default=None, validation_alias="REV_JWT_URL")

    # Key material (PEM files)
    signing_key_path: str = Field(default="signing.private.key", validation_alias="REV_JWT_SIGNING_KEY")
    signing_cert_path: str = Field(default="signing.public.key", validation_alias="REV_JWT_SIGNING_CERT")
    encryption_cert_path: str = Field(default="encrypt.public.key", validation_alias="REV_JWT_ENCRYPTION_CERT")
    decryption_key_path: str = Field(default="encrypt.private.key", validation_alias="REV_JWT_DECRYPTION_KEY")
    key_id: Optional[str] = Field(default=None, validation_alias="REV_JWT_KEY_ID")
    signing_algorithm: str = Field(default="RS256", validation_alias="REV_JWT_SIGNING_ALG")
    content_encryption: str = Field(default="A256GCM", validation_alias="REV_JWT_ENC")

    # Default claims
    issuer: str = Field(default="rev-jwt-gen-sample", validation_alias="REV_JWT_ISSUER")
    audience: str = Field(default="rev", validation_alias="REV_JWT_AUDIENCE")
    resource: str = Field(default="*", validation_alias="REV_JWT_RESOURCE")

    # Time handling (minutes / seconds)
    minutes: int = Field(default=60, validation_alias="REV_JWT_MINUTES")
    leeway: int = Field(default=0, validation_alias="REV_JWT_LEEWAY")
    drift_warning: int = Field(default=300, validation_alias="REV_JWT_DRIFT_WARNING")

    log_level: str = Field(default="INFO", validation_alias="REV_JWT_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
