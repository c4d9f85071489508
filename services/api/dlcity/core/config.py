from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# services/api/dlcity/core/config.py -> BASE_DIR == services/api (for .env)
BASE_DIR = Path(__file__).resolve().parents[2]
PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_STATIC_DIR = PACKAGE_DIR / "static"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        extra="ignore",
        env_prefix="",
        case_sensitive=False,
    )

    # Environment
    env: str = Field(default="dev", validation_alias="ENV")

    # Application
    api_name: str = Field(default="dlcity-api", validation_alias="API_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    user_agent: str = Field(default="dlcity/0.1", validation_alias="USER_AGENT")

    # Server
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")
    static_dir: str | None = Field(
        default=str(DEFAULT_STATIC_DIR), validation_alias="STATIC_DIR"
    )

    # Upstream booking API
    upstream_base_url: str = Field(
        default="https://api-my.sa.gov.ge/api/v1/DrivingLicensePracticalExams2",
        validation_alias="UPSTREAM_BASE_URL",
    )
    upstream_category_code: int = Field(
        default=4, validation_alias="UPSTREAM_CATEGORY_CODE"
    )
    upstream_timeout_secs: float = Field(
        default=5.0, validation_alias="UPSTREAM_TIMEOUT_SECS"
    )
    # The production host has historically served a chain that fails
    # verification; deployments that need it set UPSTREAM_VERIFY_TLS=false.
    upstream_verify_tls: bool = Field(
        default=True, validation_alias="UPSTREAM_VERIFY_TLS"
    )

    # Aggregation
    aggregator_max_workers: int | None = Field(
        default=None, ge=1, validation_alias="AGGREGATOR_MAX_WORKERS"
    )

    # Exam centers (id -> display name). None means the built-in table.
    centers: Annotated[dict[int, str] | None, NoDecode] = Field(
        default=None, validation_alias="CENTERS"
    )

    @field_validator("centers", mode="before")
    @classmethod
    def parse_centers(cls, v: Any) -> dict[int, str] | None:
        """
        Supported env formats:
          - JSON object: '{"2": "Kutaisi", "3": "Batumi"}'
          - Comma-separated pairs: '2=Kutaisi, 3=Batumi'
        """
        if v is None:
            return None
        if isinstance(v, dict):
            return {int(k): str(name).strip() for k, name in v.items()}
        if not isinstance(v, str):
            raise TypeError("CENTERS must be a string or mapping")

        s = v.strip()
        if not s:
            return None
        if s.startswith("{"):
            try:
                parsed = json.loads(s)
            except json.JSONDecodeError as exc:
                raise ValueError(f"CENTERS is not valid JSON: {exc}") from exc
            if not isinstance(parsed, dict):
                raise ValueError("CENTERS JSON must be an object")
            return {int(k): str(name).strip() for k, name in parsed.items()}

        out: dict[int, str] = {}
        for part in s.split(","):
            part = part.strip()
            if not part:
                continue
            key, sep, name = part.partition("=")
            if not sep:
                raise ValueError(f"CENTERS entry {part!r} must look like id=name")
            out[int(key.strip())] = name.strip()
        return out

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """
        Supported env formats:
          - JSON list: '["http://localhost:3000"]'
          - Comma-separated: 'http://localhost:3000, http://localhost:5173'
          - '*' wildcard
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if not isinstance(v, str):
            raise TypeError("cors_origins must be a string or list of strings")

        s = v.strip()
        if not s:
            return []
        if s == "*":
            return ["*"]

        if s.startswith("[") and s.endswith("]"):
            try:
                parsed = json.loads(s)
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
            except json.JSONDecodeError:
                inner = s[1:-1].strip()
                if not inner:
                    return []
                parts = [p.strip().strip('"').strip("'") for p in inner.split(",")]
                return [p for p in parts if p]

        parts = [p.strip() for p in s.split(",")]
        return [p for p in parts if p]

    # OpenTelemetry
    otel_enabled: bool = Field(default=False, validation_alias="OTEL_ENABLED")
    otel_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        validation_alias="OTEL_OTLP_ENDPOINT",
    )


settings = Settings()
