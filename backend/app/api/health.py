from fastapi import APIRouter, Depends, HTTPException

from app.core.responses import EnvelopeRoute
from app.db.session import Database, get_database
from app.services.health_service import run_checks

"""
API Health.

Rôle (fonctionnel) :
- GET /health : vérifie que l’API répond et que la base est joignable (ping SELECT 1).
- 200 si tous les indicateurs sont “up” (réponse enveloppée),
  503 sinon (le rapport complet est renvoyé dans `message` par le filtre d’erreurs).
"""

router = APIRouter(route_class=EnvelopeRoute)


@router.get("/health")
async def health(database: Database = Depends(get_database)):
    report = await run_checks({"database": database.ping})
    if not report.is_healthy:
        raise HTTPException(status_code=503, detail=report.to_dict())
    return report.to_dict()
