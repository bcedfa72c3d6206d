from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.responses import UTF8JSONResponse, now_iso

"""
Core Errors (filtre d’exceptions global).

Rôle (fonctionnel) :
- Standardise le format des erreurs renvoyées par l’API (payload homogène).
- Enregistre les exception handlers FastAPI : erreurs HTTP, validation, et fallback 500.
- Logge chaque erreur : WARNING pour les 4xx, ERROR + stacktrace pour les 5xx.

Convention de réponse (exemple) :
{
  "success": false,
  "statusCode": 404,
  "timestamp": "...",
  "path": "/api/v1/inconnu",
  "message": "Not Found"
}

Notes :
- `message` reprend detail["message"] si le detail est un objet qui en porte un,
  sinon le detail tel quel (string ou objet, ex : résultat du health check).
- Aucune stacktrace n’est renvoyée au client.
"""

log = logging.getLogger("app.errors")


def error_payload(*, status: int, path: str, message: Any) -> Dict[str, Any]:
    """Construit un payload d’erreur homogène pour l’API."""
    return {
        "success": False,
        "statusCode": status,
        "timestamp": now_iso(),
        "path": path,
        "message": message,
    }


def extract_message(detail: Any) -> Any:
    if isinstance(detail, Mapping) and "message" in detail:
        return detail["message"]
    return detail


def _request_path(request: Request) -> str:
    # équivalent de request.url côté Express : chemin + query string
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def _log_error(request: Request, status: int, exc: BaseException) -> None:
    path = _request_path(request)
    if status >= 500:
        log.error("%s %s", request.method, path, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        log.warning("%s %s %s", request.method, path, status)


def _format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    messages = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = str(err.get("msg", "Invalid value"))
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> UTF8JSONResponse:
    """Erreurs HTTP (404, 405, 503 du health check...) -> payload standard."""
    _log_error(request, exc.status_code, exc)
    return UTF8JSONResponse(
        status_code=exc.status_code,
        content=error_payload(
            status=exc.status_code,
            path=_request_path(request),
            message=extract_message(exc.detail),
        ),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> UTF8JSONResponse:
    """Erreurs de validation Pydantic -> 400 + liste de messages lisibles."""
    _log_error(request, 400, exc)
    return UTF8JSONResponse(
        status_code=400,
        content=error_payload(
            status=400,
            path=_request_path(request),
            message=_format_validation_errors(exc.errors()),
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> UTF8JSONResponse:
    """Fallback : toute exception non gérée -> 500 + log serveur avec stacktrace."""
    _log_error(request, 500, exc)
    return UTF8JSONResponse(
        status_code=500,
        content=error_payload(
            status=500,
            path=_request_path(request),
            message="Internal server error",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
