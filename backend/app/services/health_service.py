from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping

"""
Service Health.

Rôle (fonctionnel) :
- Exécute des “indicateurs” de santé (ex : ping base de données) avec un timeout.
- Agrège leurs résultats dans un format stable, lisible par un load balancer / monitoring :

{
  "status": "ok" | "error",
  "info":    {"database": {"status": "up"}},
  "error":   {"database": {"status": "down", "message": "..."}},
  "details": {... union de info + error ...}
}

Notes :
- Un indicateur est une coroutine sans argument : elle réussit (up) ou lève (down).
- Le service ne lève jamais : c’est la route qui décide du code HTTP (200 / 503).
"""

log = logging.getLogger("app.health")

PING_TIMEOUT_S = 1.0

Indicator = Callable[[], Awaitable[Any]]


@dataclass
class HealthReport:
    info: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    error: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        return not self.error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "ok" if self.is_healthy else "error",
            "info": self.info,
            "error": self.error,
            "details": {**self.info, **self.error},
        }


async def ping_check(key: str, indicator: Indicator, timeout: float = PING_TIMEOUT_S) -> Dict[str, Dict[str, Any]]:
    """Exécute un indicateur ; retourne {key: {"status": "up"|"down", ...}}."""
    try:
        await asyncio.wait_for(indicator(), timeout=timeout)
    except asyncio.TimeoutError:
        return {key: {"status": "down", "message": f"timeout of {int(timeout * 1000)}ms exceeded"}}
    except Exception as exc:
        log.warning("health indicator %s down: %s", key, exc)
        return {key: {"status": "down", "message": str(exc) or type(exc).__name__}}
    return {key: {"status": "up"}}


async def run_checks(indicators: Mapping[str, Indicator], timeout: float = PING_TIMEOUT_S) -> HealthReport:
    report = HealthReport()
    for key, indicator in indicators.items():
        result = await ping_check(key, indicator, timeout=timeout)
        if result[key]["status"] == "up":
            report.info.update(result)
        else:
            report.error.update(result)
    return report
