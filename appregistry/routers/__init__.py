"""
FastAPI routers grouped by domain (apps, health).

Each module exposes an APIRouter that app.py includes into the application.
"""
