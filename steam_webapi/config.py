from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .exceptions import InvalidKeyError


ENV_KEYS = [
    "STEAM_WEB_API_KEY",
    "STEAM_WEB_API_SECURE",
    "STEAM_WEB_API_TIMEOUT",
]

API_KEY_RE = re.compile(r"^[0-9A-F]{32}$")

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


def validate_api_key(api_key: str | None) -> str | None:
    """Return ``api_key`` unchanged, or raise if it is not a 128bit hex string."""
    if api_key is not None and not API_KEY_RE.match(api_key):
        raise InvalidKeyError()
    return api_key


@dataclass(frozen=True)
class Config:
    api_key: str | None = None
    secure: bool = True
    timeout_s: float = 30.0

    def __post_init__(self) -> None:
        validate_api_key(self.api_key)

    @staticmethod
    def load_from_env(env: dict[str, str] | None = None) -> "Config":
        env = os.environ if env is None else env

        api_key = env.get("STEAM_WEB_API_KEY", "").strip() or None

        secure = True
        raw_secure = env.get("STEAM_WEB_API_SECURE", "").strip().lower()
        if raw_secure in _FALSE_VALUES:
            secure = False
        elif raw_secure and raw_secure not in _TRUE_VALUES:
            raise ValueError(f"STEAM_WEB_API_SECURE is not a boolean: {raw_secure!r}")

        timeout_s = 30.0
        raw_timeout = env.get("STEAM_WEB_API_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout_s = float(raw_timeout)
            except ValueError:
                raise ValueError(f"STEAM_WEB_API_TIMEOUT is not a number: {raw_timeout!r}") from None
            if timeout_s <= 0:
                raise ValueError("STEAM_WEB_API_TIMEOUT must be positive")

        return Config(api_key=api_key, secure=secure, timeout_s=timeout_s)
