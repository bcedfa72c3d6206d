from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

"""
DB Session.

Rôle (fonctionnel) :
- Encapsule l’engine SQLAlchemy async (asyncpg) et la factory de sessions dans un objet
  Database construit une seule fois au démarrage (voir app.main).
- Cycle de vie aligné sur l’application :
  - connect()    : ouvre une connexion au démarrage (échec = démarrage refusé)
  - ping()       : requête minimale (SELECT 1), utilisée par le health check
  - disconnect() : libère le pool à l’arrêt
- Expose `get_db()` comme dépendance FastAPI (Depends(get_db)).

Notes :
- Les URLs postgres:// / postgresql:// sont converties vers le driver asyncpg.
- expire_on_commit=False : objets réutilisables après commit sans rechargement.
- echo=False par défaut : pas de log SQL brut (on garde les logs applicatifs JSON).
"""

_POSTGRES_SCHEMES = ("postgres", "postgresql")


def to_async_url(url: str) -> str:
    """Adapte une URL Postgres “classique” pour SQLAlchemy async + asyncpg."""
    parts = urlsplit(url)
    if parts.scheme not in _POSTGRES_SCHEMES:
        return url

    # asyncpg attend `ssl` là où libpq attend `sslmode`
    params = [
        ("ssl" if key == "sslmode" else key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(("postgresql+asyncpg", parts.netloc, parts.path, urlencode(params), parts.fragment))


class Database:
    """Client base de données (engine async + sessions)."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.engine = create_async_engine(to_async_url(url), echo=echo)
        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> None:
        await self.ping()

    async def disconnect(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session


def get_database(request: Request) -> Database:
    """Dépendance FastAPI : instance Database attachée à l’application."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dépendance FastAPI : yield une session DB et garantit sa fermeture."""
    async with get_database(request).session() as session:
        yield session
