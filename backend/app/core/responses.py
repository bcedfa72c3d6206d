from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable, Coroutine, Dict

from fastapi import Request, Response
from fastapi.routing import APIRoute
from starlette.responses import JSONResponse

"""
Core Responses.

Rôle (fonctionnel) :
- Uniformise les réponses JSON de l’API :
  - charset UTF-8 explicite sur toutes les réponses JSON
  - enveloppe de succès : {success, statusCode, timestamp, data}
- Fournit EnvelopeRoute : classe de route FastAPI qui enveloppe automatiquement
  le résultat des endpoints (les handlers restent des fonctions “métier” simples).

Convention de réponse (exemple) :
{
  "success": true,
  "statusCode": 200,
  "timestamp": "2025-01-01T12:00:00.000Z",
  "data": {...}
}

Notes :
- Les erreurs (>= 400) ne sont pas enveloppées ici : elles passent par core/errors.py.
- 204 / 304 n’ont pas de corps : renvoyées telles quelles.
"""

NO_BODY_STATUSES = (204, 304)


class UTF8JSONResponse(JSONResponse):
    """Réponse JSON avec charset UTF-8 explicite (cohérent sur tous les endpoints)."""
    media_type = "application/json; charset=utf-8"


def now_iso() -> str:
    """Timestamp ISO-8601 UTC, précision milliseconde, suffixe Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success_payload(*, data: Any, status: int) -> Dict[str, Any]:
    return {
        "success": True,
        "statusCode": status,
        "timestamp": now_iso(),
        "data": data,
    }


class EnvelopeRoute(APIRoute):
    """Route FastAPI qui enveloppe les réponses JSON de succès."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def envelope_handler(request: Request) -> Response:
            response = await handler(request)

            if not isinstance(response, JSONResponse):
                return response
            if response.status_code >= 400 or response.status_code in NO_BODY_STATUSES:
                return response

            data = json.loads(response.body) if response.body else None
            wrapped = UTF8JSONResponse(
                status_code=response.status_code,
                content=success_payload(data=data, status=response.status_code),
                background=response.background,
            )

            # On garde les headers posés par l’endpoint (cookies, cache...), sauf ceux recalculés
            for key, value in response.headers.items():
                if key in ("content-length", "content-type"):
                    continue
                wrapped.headers.append(key, value)

            return wrapped

        return envelope_handler
