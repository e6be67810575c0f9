import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_http_url = TypeAdapter(AnyHttpUrl)


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    env_validation: Literal["disabled", "enabled"] = Field(
        default_factory=lambda: os.getenv("ENV_VALIDATION") or "enabled"
    )
    api_base_url: str = Field(default_factory=lambda: os.getenv("API_BASE_URL", ""))
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "10"))
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @field_validator("api_base_url")
    @classmethod
    def _check_api_base_url(cls, value: str, info: ValidationInfo) -> str:
        if info.data.get("env_validation") == "disabled":
            return value
        try:
            _http_url.validate_python(value)
        except ValidationError as e:
            raise ValueError(f"API_BASE_URL must be an absolute http(s) URL, got {value!r}") from e
        return value


def load_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or os.getenv("LOG_LEVEL", "INFO"),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
