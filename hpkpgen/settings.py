import os
from dataclasses import dataclass, field

from .header import DEFAULT_MAX_AGE


@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="WARNING")
    MAX_AGE: int = field(default=DEFAULT_MAX_AGE)

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("HPKPGEN_LOG_LEVEL", "WARNING").upper()
        try:
            max_age = int(os.getenv("HPKPGEN_MAX_AGE", str(DEFAULT_MAX_AGE)))
            if max_age < 0:
                raise ValueError
        except ValueError:
            max_age = DEFAULT_MAX_AGE
        return Settings(LOG_LEVEL=log_level, MAX_AGE=max_age)
