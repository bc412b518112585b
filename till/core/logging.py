"""Logging setup for the till.

Modules log through ``logging.getLogger(__name__)``; this module only wires
the root logger once at startup. JSON output is meant for log shippers,
plain text for a developer console.
"""

import json
import logging
from datetime import datetime, timezone

# attributes every LogRecord has; anything else came in through ``extra=``
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(level.upper())

    # replace our own handler on re-configuration instead of stacking them
    for handler in list(root.handlers):
        if getattr(handler, "_till_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._till_handler = True
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)
    return root
