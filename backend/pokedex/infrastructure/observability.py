"""Structured Logging — one JSON object per line, keyed by Pokedex fields.

Invariants:
    - Every line has timestamp (UTC, from the record), level, logger, message
    - Lookup and dataset fields (pokemon_id, ability_url, failure, error_code,
      record_count, path, ...) are copied through only when set on the record
    - setup_logging is idempotent: a second call replaces the handler it
      installed before instead of stacking another one

Design Decisions:
    - Text format for local runs (LOG_FORMAT=text), JSON everywhere else
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "pokemon_id", "generation", "ability_url", "failure", "error_code",
    "record_count", "elapsed_ms", "path",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord and its known extra fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, record.__dict__[key]) for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class _PokedexHandler(logging.StreamHandler):
    """Marker type so setup_logging can find its own handler on the root."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the Pokedex handler on the root logger."""
    root = logging.getLogger()
    for old in [h for h in root.handlers if isinstance(h, _PokedexHandler)]:
        root.removeHandler(old)
        old.close()

    handler = _PokedexHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
