"""Logging setup for the stock ticker service."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(env: str = "prod") -> None:
    """'dev' gets DEBUG text logs; everything else INFO JSON lines on stderr."""
    handler = logging.StreamHandler(sys.stderr)
    if env == "dev":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
        level = logging.DEBUG
    else:
        handler.setFormatter(JSONFormatter())
        level = logging.INFO

    logging.basicConfig(level=level, handlers=[handler], force=True)
