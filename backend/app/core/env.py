from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

"""
Core Env (validation).

Rôle (fonctionnel) :
- Déclare le schéma des variables d’environnement reconnues (types, défauts, coercions).
- Valide l’environnement fusionné (hérité + .env) en une seule passe.
- Produit un résultat de démarrage explicite :
  - StartupSuccess(config) : configuration validée, immuable
  - StartupFailure(errors) : toutes les erreurs par champ (pas seulement la première)

Notes :
- validate_environment() est pure : elle ne lit que le mapping fourni et ne quitte jamais
  le processus. C’est le bootstrap qui décide de l’arrêt (voir core/bootstrap.py).
- Une valeur vide ("") est traitée comme absente : défaut si optionnelle, erreur si requise.
"""

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class NodeEnv(str, Enum):
    """Modes d’exécution supportés."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class EnvConfig(BaseModel):
    """
    Configuration validée (source unique de vérité pour tout le processus).

    Valeurs vides : traitées comme absentes pour TOUTES les clés, pas seulement NODE_ENV.
    PORT="" ou JWT_*_EXPIRES_IN="" prennent donc leur défaut (3000, "15m", "7d")
    au lieu de 0 / "" ; une clé requise vide échoue en "Field required".
    """

    # --- App ---
    NODE_ENV: NodeEnv = NodeEnv.DEVELOPMENT
    PORT: int = Field(default=3000, ge=0, le=65535)

    # --- DB ---
    DATABASE_URL: str = Field(min_length=1)

    # --- JWT ---
    JWT_ACCESS_SECRET: str = Field(min_length=1)
    JWT_REFRESH_SECRET: str = Field(min_length=1)
    JWT_ACCESS_EXPIRES_IN: str = "15m"
    JWT_REFRESH_EXPIRES_IN: str = "7d"

    # --- Observabilité ---
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_MS: int = Field(default=800, ge=0)

    # Immuable + ignore le reste de l’environnement (PATH, HOME, ...)
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_values(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return {key: value for key, value in data.items() if key in cls.model_fields and value != ""}

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level


@dataclass(frozen=True)
class FieldError:
    """Erreur de validation attribuable à une variable précise."""
    field: str
    message: str


@dataclass(frozen=True)
class StartupSuccess:
    config: EnvConfig


@dataclass(frozen=True)
class StartupFailure:
    errors: Tuple[FieldError, ...]

    def field_errors(self) -> Dict[str, List[str]]:
        """Vue aplatie {champ: [messages]} (utilisée pour les logs)."""
        grouped: Dict[str, List[str]] = {}
        for err in self.errors:
            grouped.setdefault(err.field, []).append(err.message)
        return grouped


StartupResult = Union[StartupSuccess, StartupFailure]


def _to_field_errors(exc: ValidationError) -> Tuple[FieldError, ...]:
    errors = []
    for item in exc.errors():
        loc = item.get("loc") or ("__root__",)
        errors.append(FieldError(field=str(loc[0]), message=str(item.get("msg", "Invalid value"))))
    return tuple(errors)


def validate_environment(environ: Mapping[str, str]) -> StartupResult:
    """Valide un environnement fusionné et retourne un StartupResult (jamais d’exception)."""
    try:
        config = EnvConfig.model_validate(dict(environ))
    except ValidationError as exc:
        return StartupFailure(errors=_to_field_errors(exc))
    return StartupSuccess(config=config)
