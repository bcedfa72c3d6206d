"""
app.db

Package base de données : client async (engine + sessions) et dépendances FastAPI.

Contenu :
- session : classe Database (connect / ping / disconnect / session) et Depends(get_db).
"""
from app.db.session import Database, get_database, get_db, to_async_url

__all__ = ["Database", "get_database", "get_db", "to_async_url"]
