"""
app.core

Package “cœur” : tout ce qui est transversal et ne dépend d’aucun domaine métier.

- env_file
  Lecture du .env local ; complète l’environnement hérité sans jamais l’écraser.

- env
  Schéma des variables reconnues (types, défauts, coercions) et validation pure
  -> StartupSuccess(config) | StartupFailure(erreurs par champ).

- bootstrap
  Ordonne .env -> validation ; arrête le processus (exit 1) si la configuration est invalide.

- config
  Vues typées en lecture seule (app / jwt / database) sur la configuration validée.

- errors / responses
  Format uniforme des réponses : enveloppe de succès et filtre d’exceptions global.

- logging / request_id
  Logs JSON corrélés par request_id.
"""
