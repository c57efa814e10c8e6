import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError


class Settings(BaseModel):
    workers: int = Field(default=3, ge=1)
    policy: str = "contiguous"
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    home: str = ".popreport"

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v}")
        return v


_ENV = {
    "workers": "POPREPORT_WORKERS",
    "policy": "POPREPORT_POLICY",
    "log_level": "POPREPORT_LOG_LEVEL",
    "log_dir": "POPREPORT_LOG_DIR",
    "home": "POPREPORT_HOME",
}


def load_settings() -> Settings:
    load_dotenv()  # load from .env if present
    data = {field: os.environ[var] for field, var in _ENV.items() if os.environ.get(var)}
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
