from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import MutableMapping, Optional, Union

from app.core.env import EnvConfig, StartupFailure, validate_environment
from app.core.env_file import load_env_file

"""
Core Bootstrap.

Rôle (fonctionnel) :
- Ordonne le démarrage de la configuration, strictement dans cet ordre :
  1) chargement du .env local (complète l’environnement hérité)
  2) validation du schéma
  3) retour de la configuration validée
- Arrête le processus (exit 1) si la configuration est invalide, après avoir loggé
  toutes les erreurs par champ : aucun démarrage partiel ou dégradé.

Notes :
- C’est le seul endroit qui consomme le StartupResult et qui peut quitter le processus.
- Par défaut le .env est cherché dans le répertoire courant.
"""

log = logging.getLogger("app.bootstrap")


def default_env_path() -> Path:
    return Path.cwd() / ".env"


def bootstrap(
    env_path: Optional[Union[str, Path]] = None,
    environ: Optional[MutableMapping[str, str]] = None,
) -> EnvConfig:
    """Charge puis valide l’environnement ; quitte avec le code 1 en cas d’échec."""
    target = os.environ if environ is None else environ

    load_env_file(env_path if env_path is not None else default_env_path(), target)
    result = validate_environment(target)

    if isinstance(result, StartupFailure):
        log.error("Invalid environment variables:", extra={"field_errors": result.field_errors()})
        for field, messages in result.field_errors().items():
            log.error("%s: %s", field, "; ".join(messages))
        sys.exit(1)

    return result.config
