import argparse
import json

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from app.core.bootstrap import bootstrap, default_env_path
from app.core.config import build_settings
from app.core.logging import setup_logging

"""
Script CLI: check_env

Rôle (fonctionnel) :
- Exécute la séquence de démarrage de la configuration (.env -> validation) sans lancer l’API.
- Affiche la configuration validée, secrets masqués.
- Code de sortie 1 si la configuration est invalide (erreurs par champ dans les logs).

Usage typique :
- Vérifier un .env avant un déploiement :  python -m scripts.check_env --env-file .env.prod
"""

SECRET_FIELDS = ("access_secret", "refresh_secret")


def mask(value: str) -> str:
    return "****" if value else ""


def mask_url(url: str) -> str:
    # DSN hors format SQLAlchemy : on ne sait pas où est le mot de passe, tout est masqué
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return mask(url)


def render(settings) -> dict:
    jwt = {
        key: (mask(value) if key in SECRET_FIELDS else value)
        for key, value in vars(settings.jwt).items()
    }
    return {
        "app": vars(settings.app),
        "jwt": jwt,
        "database": {"url": mask_url(settings.database.url)},
    }


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Valide la configuration d’environnement.")
    parser.add_argument("--env-file", default=None, help=f"Fichier .env (défaut : {default_env_path()})")
    args = parser.parse_args(argv)

    setup_logging()
    config = bootstrap(args.env_file)

    print(json.dumps(render(build_settings(config)), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
