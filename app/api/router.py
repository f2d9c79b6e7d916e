from fastapi import APIRouter

from app.api.games import router as games_router
from app.api.health import router as health_router
from app.api.tournaments import router as tournaments_router

api_router = APIRouter()

api_router.include_router(tournaments_router)
api_router.include_router(games_router)

# Liveness and readiness
api_router.include_router(health_router)
