"""Runtime configuration state management."""

from typing import Any, Dict, Optional

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tracecontext.errors import ConfigError

ENV_PREFIX = "TRACECONTEXT_"

_DEFAULTS = {
    "max_tracestate_length": 512,
    "warn_on_invalid_tracestate": True,
}

# Global runtime configuration state
_config = dict(_DEFAULTS)


class Settings(BaseSettings):
    """Settings read from ``TRACECONTEXT_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, case_sensitive=False, extra="ignore", env_parse_none_str="none"
    )

    max_tracestate_length: Optional[int] = Field(default=512, ge=1)
    warn_on_invalid_tracestate: bool = Field(default=True)


def set_max_tracestate_length(value: Optional[int]) -> None:
    if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value <= 0):
        raise ConfigError("max_tracestate_length must be a positive integer or None", {"value": value})
    _config["max_tracestate_length"] = value


def get_max_tracestate_length() -> Optional[int]:
    return _config["max_tracestate_length"]


def set_warn_on_invalid_tracestate(value: bool) -> None:
    if not isinstance(value, bool):
        raise ConfigError("warn_on_invalid_tracestate must be a bool", {"value": value})
    _config["warn_on_invalid_tracestate"] = value


def get_warn_on_invalid_tracestate() -> bool:
    return _config["warn_on_invalid_tracestate"]


def reset() -> None:
    """Restore every setting to its default."""
    _config.clear()
    _config.update(_DEFAULTS)


def load_config_from_env() -> Dict[str, Any]:
    """
    Read settings from ``TRACECONTEXT_*`` environment variables.

    Only variables that are set appear in the result. Set
    ``TRACECONTEXT_MAX_TRACESTATE_LENGTH=none`` to disable truncation.

    Raises:
        ConfigError: a variable holds a value of the wrong type or range
    """
    try:
        settings = Settings()
    except PydanticValidationError as exc:
        details = {".".join(str(p) for p in error["loc"]): error["msg"] for error in exc.errors()}
        raise ConfigError("invalid environment configuration", details) from exc
    return settings.model_dump(exclude_unset=True)


def configure_from_env() -> Dict[str, Any]:
    """Apply environment settings and return what was applied."""
    loaded = load_config_from_env()
    if "max_tracestate_length" in loaded:
        set_max_tracestate_length(loaded["max_tracestate_length"])
    if "warn_on_invalid_tracestate" in loaded:
        set_warn_on_invalid_tracestate(loaded["warn_on_invalid_tracestate"])
    return loaded
