"""Library configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_INCLUDE_ROOT_SEGMENT = False
DEFAULT_GLOBAL_ERROR_KEY = ""
DEFAULT_ERROR_MESSAGE = "Request failed"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class ResultEnvelopeSettings:
    """Runtime settings for error keying and response rendering."""

    include_root_segment: bool
    global_error_key: str
    default_error_message: str

    def safe_for_logging(self) -> dict[str, str | bool]:
        """Return settings in a form suitable for log lines."""
        return {
            "include_root_segment": self.include_root_segment,
            "global_error_key": self.global_error_key,
            "default_error_message": self.default_error_message,
        }


@lru_cache(maxsize=1)
def get_settings() -> ResultEnvelopeSettings:
    """Load settings from the environment."""
    return ResultEnvelopeSettings(
        include_root_segment=_get_bool_env(
            "RESULT_ENVELOPE_INCLUDE_ROOT_SEGMENT",
            DEFAULT_INCLUDE_ROOT_SEGMENT,
        ),
        global_error_key=os.getenv("RESULT_ENVELOPE_GLOBAL_ERROR_KEY", DEFAULT_GLOBAL_ERROR_KEY),
        default_error_message=os.getenv("RESULT_ENVELOPE_DEFAULT_ERROR_MESSAGE", DEFAULT_ERROR_MESSAGE),
    )
