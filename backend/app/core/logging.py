from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from .request_id import get_request_id

"""
Core Logging.

Rôle (fonctionnel) :
- Sortie JSON sur stdout, une ligne par événement, pour l’application comme pour uvicorn.
- Chaque ligne porte le request_id courant ('-' hors requête : bootstrap, lifespan...).
- Les champs structurés passés via `extra=` sont recopiés s’ils font partie d’EXTRA_KEYS :
  - middleware HTTP : method, path, status_code, duration_ms, client_ip
  - bootstrap : field_errors (erreurs de configuration par variable)

Notes :
- setup_logging() est rappelée après le bootstrap avec le LOG_LEVEL validé :
  le handler précédent est remplacé, jamais empilé.
"""

EXTRA_KEYS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_ip",
    "field_errors",
)

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """Sérialise un LogRecord en objet JSON compact (ts, level, logger, request_id, msg + extras)."""

    def format(self, record: logging.LogRecord) -> str:
        event: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "msg": record.getMessage(),
        }
        event.update({key: record.__dict__[key] for key in EXTRA_KEYS if key in record.__dict__})

        if record.exc_info:
            event["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(event, ensure_ascii=False, default=str)


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())
    return handler


def setup_logging(level: str = "INFO") -> None:
    lvl = level.upper()
    handler = _json_handler()

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(lvl)

    # uvicorn écrit sur le même handler, sans repasser par le root (pas de double ligne)
    for name in UVICORN_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers[:] = [handler]
        logger.setLevel(lvl)
        logger.propagate = False
