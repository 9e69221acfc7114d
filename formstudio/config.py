"""Settings read from environment variables."""

from __future__ import annotations

from dataclasses import dataclass
import os

DEFAULT_ENDPOINT = "http://localhost:5000/sign-pdf"


def get_string_val(key: str, default: str | None = None) -> str | None:
    raw = os.getenv(key.upper()) or None
    return raw.strip() if raw is not None else default


def get_number_val(key: str, default: float) -> float:
    key = key.upper()
    raw = os.getenv(key) or None
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' is not a valid number: '{raw}'.")


@dataclass(frozen=True, slots=True)
class Settings:
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 30.0
    zoom: float = 1.0
    log_level: str = "info"
    log_dir: str | None = None

    @property
    def debug(self) -> bool:
        return self.log_level.lower() == "debug"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            endpoint=get_string_val("FORMSTUDIO_ENDPOINT", DEFAULT_ENDPOINT),
            timeout=get_number_val("FORMSTUDIO_TIMEOUT", 30.0),
            zoom=get_number_val("FORMSTUDIO_ZOOM", 1.0),
            log_level=get_string_val("LOG_LEVEL", "info"),
            log_dir=get_string_val("FORMSTUDIO_LOG_DIR"),
        )
