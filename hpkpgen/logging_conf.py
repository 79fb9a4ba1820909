"""stderr logging for hpkpgen runs.

Key files are the inputs of every run, so any PEM private-key armor that
reaches a log message or its arguments is replaced before it is emitted.
"""

import json
import logging
import os
import re
from typing import Any, Optional

from .settings import Settings

_PEM_PRIVATE_KEY = re.compile(
    r"-----BEGIN (?P<label>(?:RSA |EC |DSA |ENCRYPTED )?PRIVATE KEY)-----.*?-----END (?P=label)-----",
    re.DOTALL,
)
_REDACTED = "[REDACTED-PRIVATE-KEY]"

_TEXT_FORMAT = "hpkpgen: %(levelname)s %(name)s: %(message)s"


def _scrub(value: Any) -> Any:
    if isinstance(value, bytes):
        value = value.decode("ascii", "replace")
    if isinstance(value, str):
        return _PEM_PRIVATE_KEY.sub(_REDACTED, value)
    return value


class PrivateKeyFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = _scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_scrub(a) for a in record.args)
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line; `path` is included when a record carries one."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        path = getattr(record, "path", None)
        if path is not None:
            payload["path"] = str(path)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _json_from_env() -> bool:
    return os.getenv("HPKPGEN_LOG_JSON", "false").lower() in ("1", "true", "yes")


def setup_logging(settings: Settings, json_mode: Optional[bool] = None) -> logging.Handler:
    root = logging.getLogger()
    existing = getattr(root, "_hpkpgen_handler", None)
    if existing is not None:
        return existing

    level = logging.getLevelName(settings.LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.WARNING
    root.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(PrivateKeyFilter())
    use_json = _json_from_env() if json_mode is None else json_mode
    handler.setFormatter(JsonFormatter() if use_json else logging.Formatter(_TEXT_FORMAT))
    root.addHandler(handler)

    root._hpkpgen_handler = handler  # type: ignore[attr-defined]
    return handler
