from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from app.core.env import EnvConfig, NodeEnv

"""
Core Config (accesseurs).

Rôle (fonctionnel) :
- Expose des vues typées, en lecture seule, de la configuration validée (EnvConfig).
- Regroupe les valeurs par préoccupation :
  - app      : mode, port, niveau de log, seuil “slow request”
  - jwt      : secrets + durées d’expiration
  - database : URL de connexion

Notes :
- Ces vues sont de simples projections : aucun calcul, aucun cache hors de l’EnvConfig unique.
- L’objet Settings est construit une seule fois au démarrage puis rangé dans app.state.settings.
  Le code des routes le récupère via la dépendance get_settings (pas de global importable).
"""


@dataclass(frozen=True)
class AppConfig:
    node_env: str
    port: int
    log_level: str
    slow_request_ms: int

    @property
    def is_production(self) -> bool:
        return self.node_env == NodeEnv.PRODUCTION.value


@dataclass(frozen=True)
class JwtConfig:
    access_secret: str
    refresh_secret: str
    access_expires_in: str
    refresh_expires_in: str


@dataclass(frozen=True)
class DatabaseConfig:
    url: str


@dataclass(frozen=True)
class Settings:
    app: AppConfig
    jwt: JwtConfig
    database: DatabaseConfig


def app_config(env: EnvConfig) -> AppConfig:
    return AppConfig(
        node_env=env.NODE_ENV.value,
        port=env.PORT,
        log_level=env.LOG_LEVEL,
        slow_request_ms=env.SLOW_REQUEST_MS,
    )


def jwt_config(env: EnvConfig) -> JwtConfig:
    return JwtConfig(
        access_secret=env.JWT_ACCESS_SECRET,
        refresh_secret=env.JWT_REFRESH_SECRET,
        access_expires_in=env.JWT_ACCESS_EXPIRES_IN,
        refresh_expires_in=env.JWT_REFRESH_EXPIRES_IN,
    )


def database_config(env: EnvConfig) -> DatabaseConfig:
    return DatabaseConfig(url=env.DATABASE_URL)


def build_settings(env: EnvConfig) -> Settings:
    """Construit les vues namespacées à partir de la configuration validée."""
    return Settings(app=app_config(env), jwt=jwt_config(env), database=database_config(env))


def get_settings(request: Request) -> Settings:
    """Dépendance FastAPI : Settings attaché à l’application au démarrage."""
    return request.app.state.settings
