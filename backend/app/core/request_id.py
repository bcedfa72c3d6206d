from __future__ import annotations

import uuid
from contextvars import ContextVar

"""
Core Request ID.

Rôle (fonctionnel) :
- Porte l’identifiant de corrélation de la requête en cours dans un ContextVar (isolé par tâche async).
- Le middleware HTTP (app.main) le fixe en entrée de requête, le renvoie dans X-Request-Id
  puis le remet à None ; le RequestIdFilter du logging le lit pour chaque log.

Notes :
- L’id entrant vient du client : il est nettoyé (caractères imprimables, longueur bornée)
  avant d’atterrir dans les logs et dans le header de réponse. S’il est vide après nettoyage,
  un UUID4 le remplace.
"""

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128

_current: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return _current.get()


def set_request_id(value: str | None) -> None:
    _current.set(value)


def sanitize_request_id(raw: str | None) -> str:
    """Ne garde que les caractères ASCII imprimables (hors espaces), tronqué à MAX_REQUEST_ID_LENGTH."""
    if not raw:
        return ""
    kept = "".join(ch for ch in raw if ch.isascii() and ch.isprintable() and not ch.isspace())
    return kept[:MAX_REQUEST_ID_LENGTH]


def ensure_request_id(incoming: str | None = None) -> str:
    rid = sanitize_request_id(incoming) or uuid.uuid4().hex
    _current.set(rid)
    return rid
