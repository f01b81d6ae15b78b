"""Process configuration loaded from environment variables.

``api.main`` calls ``load_dotenv()`` before anything reads the environment,
so values may also come from a ``.env`` file. MongoDB settings are read by
``adapter.mongodb.connection``.
"""

import os
import re
from dataclasses import dataclass
from functools import lru_cache

PRICE_CIPHER_MODES = ('fernet', 'legacy')

_DURATION_PATTERN = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_DURATION_UNITS = {'': 1, 's': 1, 'm': 60, 'h': 3600, 'd': 86400}


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    price_encryption_key: str
    jwt_expires_in: int = 7 * 86400
    jwt_algorithm: str = 'HS256'
    price_cipher_mode: str = 'fernet'
    bcrypt_rounds: int = 10
    app_env: str = 'development'

    @property
    def is_production(self) -> bool:
        return self.app_env == 'production'


def parse_duration(value: str) -> int:
    """Parse '7d', '12h', '30m', '45s' or a bare number of seconds."""
    match = _DURATION_PATTERN.match(value or '')
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    seconds = int(match.group(1)) * _DURATION_UNITS[match.group(2)]
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return seconds


def _require(name: str, hint: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} environment variable is required. {hint}")
    return value


def load_settings() -> Settings:
    """Build Settings from the environment.

    Raises:
        ValueError: a required secret is missing or a value is malformed
    """
    jwt_secret_key = _require(
        "JWT_SECRET_KEY",
        "Generate a secure key with: openssl rand -hex 32",
    )
    price_encryption_key = _require(
        "PRICE_ENCRYPTION_KEY",
        "Generate a secure key with: openssl rand -hex 32",
    )

    price_cipher_mode = os.getenv("PRICE_CIPHER_MODE", "fernet").strip().lower()
    if price_cipher_mode not in PRICE_CIPHER_MODES:
        raise ValueError(
            f"PRICE_CIPHER_MODE must be one of {', '.join(PRICE_CIPHER_MODES)}, got {price_cipher_mode!r}"
        )

    bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "10"))
    if not 4 <= bcrypt_rounds <= 31:
        raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")

    return Settings(
        jwt_secret_key=jwt_secret_key,
        price_encryption_key=price_encryption_key,
        jwt_expires_in=parse_duration(os.getenv("JWT_EXPIRES_IN", "7d")),
        price_cipher_mode=price_cipher_mode,
        bcrypt_rounds=bcrypt_rounds,
        app_env=os.getenv("APP_ENV", "development").strip().lower(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide Settings, loaded once."""
    return load_settings()
