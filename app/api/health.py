from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_health_check_service
from app.services.health import HealthCheckService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def liveness():
    return {"status": "healthy"}


@router.get("/details")
async def readiness(health: HealthCheckService = Depends(get_health_check_service)):
    report = await health.run()
    return JSONResponse(status_code=report.status_code, content=report.to_dict())
