from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from unixid.core.errors import ConfigError

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    log_dir: str = "logs"
    level: str = "INFO"
    file_enabled: bool = True

    @field_validator("level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        lv = str(v or "").strip().upper()
        if lv not in _LEVELS:
            raise ValueError(f"unknown log level: {v!r}")
        return lv


class UnixIdConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    config_version: int = Field(default=1, ge=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def read_json_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError("Config file is not valid JSON.", path=path, error=str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError("Config file could not be read.", path=path, error=str(e)) from e
    if not isinstance(obj, dict):
        raise ConfigError("Config file must contain a JSON object.", path=path)
    return obj


def load_config(path: Optional[str] = None) -> UnixIdConfig:
    """
    Load config from a JSON file.

    Missing path or missing file yields defaults; anything unreadable or
    failing validation raises ConfigError.
    """
    if not path or not os.path.exists(path):
        return UnixIdConfig()
    raw = read_json_file(path)
    try:
        return UnixIdConfig.model_validate(raw)
    except PydanticValidationError as e:
        raise ConfigError("Config file failed validation.", path=path, errors=[err.get("msg") for err in e.errors()]) from e
