from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, MutableMapping, Optional, Union

"""
Core Env File.

Rôle (fonctionnel) :
- Lit un fichier .env local optionnel (format KEY=VALUE, une entrée par ligne).
- Complète l’environnement hérité du processus (shell, conteneur, orchestrateur)
  sans jamais écraser une variable déjà définie.

Format accepté :
- lignes vides et lignes commençant par `#` : ignorées
- lignes sans `=` : ignorées silencieusement
- la clé est le texte avant le premier `=`, la valeur le texte après (trimés)
- des guillemets doubles en début/fin de valeur sont retirés

Notes :
- Un fichier absent n’est pas une erreur : c’est une source vide.
- Lecture en UTF-8 (BOM toléré) ; un octet invalide devient U+FFFD au lieu de bloquer le démarrage.
- Ce module n’est appelé qu’une fois, par le bootstrap, avant la validation.
"""


def _strip_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_env_text(text: str) -> Dict[str, str]:
    """Parse le contenu d’un fichier .env en dict (dernière occurrence gagnante)."""
    values: Dict[str, str] = {}

    # BOM éventuel (texte lu sans utf-8-sig)
    for line in text.lstrip("\ufeff").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        key, sep, raw = stripped.partition("=")
        key = key.strip()
        # "=valeur" : pas de nom de variable exploitable
        if not sep or not key:
            continue

        values[key] = _strip_quotes(raw.strip())

    return values


def load_env_file(
    path: Union[str, Path],
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Injecte les valeurs du fichier dans `environ` (os.environ par défaut).

    - Les clés déjà présentes dans l’environnement hérité sont conservées.
    - Retourne uniquement les entrées réellement appliquées.
    """
    target = os.environ if environ is None else environ
    env_path = Path(path)

    if not env_path.is_file():
        return {}

    applied: Dict[str, str] = {}
    for key, value in parse_env_text(env_path.read_text(encoding="utf-8-sig", errors="replace")).items():
        if key in target:
            continue
        target[key] = value
        applied[key] = value

    return applied
