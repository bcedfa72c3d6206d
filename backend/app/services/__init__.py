"""
app.services

Package “services” : logique applicative indépendante des endpoints HTTP.

Principe :
- app.api = transport HTTP (routes, dépendances, codes de statut)
- app.services = orchestration réutilisable et testable (ex : health_service)
"""
