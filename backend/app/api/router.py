from fastapi import APIRouter

from app.core.responses import EnvelopeRoute

from .health import router as health_router

"""
Router principal de l’API.

Rôle (fonctionnel) :
- Regroupe les routeurs par domaine sous le préfixe global /api/v1.
- Sert de point d’entrée unique pour l’inclusion dans l’application FastAPI.

Note :
- include_router() conserve la classe de route du sous-routeur : chaque routeur de domaine
  doit lui aussi déclarer route_class=EnvelopeRoute (vérifié par les tests).
"""

API_PREFIX = "/api/v1"

api_router = APIRouter(prefix=API_PREFIX, route_class=EnvelopeRoute)

api_router.include_router(health_router, tags=["health"])
