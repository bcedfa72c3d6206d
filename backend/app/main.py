from __future__ import annotations

import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import API_PREFIX, api_router
from app.core.bootstrap import bootstrap
from app.core.config import Settings, build_settings
from app.core.env import EnvConfig
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.request_id import REQUEST_ID_HEADER, ensure_request_id, set_request_id
from app.core.responses import UTF8JSONResponse
from app.db.session import Database

"""
Application FastAPI (entrypoint).

Rôle (fonctionnel) :
- create_app() assemble l’application à partir d’une configuration DÉJÀ validée :
  - settings namespacés (app.state.settings) et client DB (app.state.database)
  - préfixe global /api/v1, CORS, middleware d’observabilité
  - filtre d’exceptions global + enveloppe de réponse
- main() : démarrage complet (logging -> bootstrap -> app -> uvicorn).

Démarrage :
- python -m app.main               (ou la commande `backend-skeleton`)
- uvicorn app.main:create_app --factory

Ordre garanti :
- rien ne lit la configuration avant bootstrap() ; en cas d’échec le processus
  s’arrête avant la construction de l’app et du client DB.
"""

log = logging.getLogger("app")
http_log = logging.getLogger("app.http")

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
CORS_HEADERS = ["Content-Type", "Authorization"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database

    await database.connect()

    port = settings.app.port
    log.info("Application running on http://localhost:%s%s", port, API_PREFIX)
    log.info("Health check at http://localhost:%s%s/health", port, API_PREFIX)
    log.info("Environment: %s", settings.app.node_env)

    try:
        yield
    finally:
        await database.disconnect()


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    # Production : pas d’accès cross-origin
    if settings.app.is_production:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )


def _configure_observability(app: FastAPI, slow_ms: int) -> None:
    @app.middleware("http")
    async def request_observability(request: Request, call_next):
        rid = ensure_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)

            # Slow request => WARNING, sinon INFO
            level = logging.WARNING if duration_ms >= slow_ms else logging.INFO
            http_log.log(
                level,
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": getattr(response, "status_code", None),
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else None,
                },
            )
            set_request_id(None)


def create_app(config: Optional[EnvConfig] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Construit l’application.

    - config=None : chemin “factory” (uvicorn --factory) -> logging + bootstrap ici.
    - database=None : client construit depuis DATABASE_URL.
    """
    if config is None:
        setup_logging()
        config = bootstrap()
        setup_logging(config.LOG_LEVEL)

    settings = build_settings(config)

    app = FastAPI(
        title="Backend API",
        debug=False,
        default_response_class=UTF8JSONResponse,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database if database is not None else Database(settings.database.url)

    _configure_cors(app, settings)
    _configure_observability(app, settings.app.slow_request_ms)
    register_exception_handlers(app)

    app.include_router(api_router)
    return app


def main() -> None:
    setup_logging()
    config = bootstrap()
    setup_logging(config.LOG_LEVEL)

    app = create_app(config)
    uvicorn.run(app, host="0.0.0.0", port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
