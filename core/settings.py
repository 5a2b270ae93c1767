import json
import os
import secrets

from pathlib import Path
from typing import Annotated, Any, ClassVar, Optional

from pydantic import PostgresDsn, field_validator
from pydantic.fields import FieldInfo, computed_field
from pydantic_settings import BaseSettings, NoDecode, PydanticBaseSettingsSource


class JsonConfigSettingsSource(PydanticBaseSettingsSource):
    """Reads settings from the JSON file named by SETTINGS_JSON_FILE (mounted secrets)."""

    env_var: ClassVar[str] = "SETTINGS_JSON_FILE"

    def load_json_secret(self) -> dict[str, Any]:
        path = os.environ.get(self.env_var)
        if not path:
            return {}
        secret_file = Path(path)
        if not secret_file.is_file():
            return {}
        return json.loads(secret_file.read_text(encoding="utf-8"))

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        field_value = self._json_secret.get(field_name)
        return field_value, field_name, False

    def prepare_field_value(self, field_name: str, field: FieldInfo, value: Any, value_is_complex: bool) -> Any:  # noqa: ANN401
        return value

    def __call__(self) -> dict[str, Any]:  # noqa: D102
        self._json_secret = self.load_json_secret()
        d: dict[str, Any] = {}

        for field_name, field in self.settings_cls.model_fields.items():
            field_value, field_key, value_is_complex = self.get_field_value(field, field_name)
            field_value = self.prepare_field_value(field_name, field, field_value, value_is_complex)
            if field_value is not None:
                d[field_key] = field_value

        return d


class Settings(BaseSettings):

    SECRET_KEY: str = secrets.token_urlsafe(32)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    JWT_ALGORITHM: str = "HS256"
    SERVER_ADDRESS: str = "0.0.0.0"
    SERVER_PORT: int = int(os.getenv("PORT", 8000))  # Render/Railway inject PORT
    # Comma separated or a JSON list
    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            if v.startswith("["):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    raise ValueError(v) from None
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    FRONTEND_URL: Optional[str] = None
    DATABASE_URL: Optional[str] = None
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "mipripity"
    POSTGRES_POOL_SIZE: int = 20
    POSTGRES_MAX_OVERFLOW: int = 0
    POSTGRES_POOL_TIMEOUT_SECONDS: float = 5.0
    POSTGRES_CONNECT_TIMEOUT_SECONDS: int = 5

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        # Hosted Postgres hands out plain postgresql:// URLs
        if self.DATABASE_URL:
            db_url = self.DATABASE_URL
            if db_url.startswith("postgres://"):
                db_url = db_url.replace("postgres://", "postgresql://", 1)
            if db_url.startswith("postgresql://"):
                db_url = db_url.replace("postgresql://", "postgresql+psycopg://", 1)
            return db_url

        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                path=self.POSTGRES_DB,
            )
        )

    # Vote casting
    VOTE_MAX_ATTEMPTS: int = 5
    VOTE_RETRY_BACKOFF_SECONDS: float = 0.02
    VOTE_TRANSACTION_TIMEOUT_SECONDS: float = 10.0

    WATCH_FILES: bool = False
    LOG_LEVEL: str = "info"  # critical, error, warning, info, debug

    class Config:
        env_file = "local.env"
        case_sensitive = True
        extra = "allow"
        env_ignore_empty = True

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, JsonConfigSettingsSource(settings_cls), dotenv_settings

settings = Settings()
