"""Logging configuration for the JSON Feed service.

Call sites attach feed context through ``extra``, e.g.
``logger.warning("...", extra={"feed_url": url, "status_code": 404})``.
The JSON formatter lifts those attributes into the record; the plain
development format ignores them.
"""

import json
import logging
import sys

from jsonfeed.config import get_settings

# LogRecord attributes copied into JSON output when a call site sets them
CONTEXT_FIELDS = ("feed_url", "status_code", "error_kind", "error_path")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with feed context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        # Feed titles and URLs are often non-ASCII; keep them readable
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging() -> None:
    """Configure root logging from settings: JSON in prod, plain text otherwise."""
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)

    if settings.env == "prod":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.log_level)
