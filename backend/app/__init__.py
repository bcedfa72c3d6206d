"""
app

Package racine du backend (squelette de service HTTP).

Rôle (fonctionnel) :
- Contient tout le code applicatif : configuration, API, accès DB.
- Sert de point d’ancrage pour les imports : `from app...`

Organisation (haut niveau) :
- app.core     : briques transverses (env, bootstrap, config, erreurs, réponses, logs, request_id)
- app.api      : routes FastAPI (health)
- app.db       : client base de données async + dépendances
- app.services : logique réutilisable hors HTTP (agrégation du health check)
- app.main     : assemblage de l’application + point d’entrée
"""
