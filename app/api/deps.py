from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import AsyncSessionLocal, engine
from app.repositories import UnitOfWork
from app.schemas.request_parameters import RequestParameters, TournamentRequestParameters
from app.services.health import HealthCheckService
from app.services.service_manager import ServiceManager

JSON_PATCH_MEDIA_TYPE = "application/json-patch+json"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


def get_unit_of_work(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


def get_service_manager(
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: Settings = Depends(get_settings),
) -> ServiceManager:
    return ServiceManager(uow, settings)


def get_request_parameters(
    page_number: int = Query(default=1, ge=1, alias="pageNumber"),
    page_size: int | None = Query(default=None, alias="pageSize"),
) -> RequestParameters:
    if page_size is None:
        return RequestParameters(page_number=page_number)
    return RequestParameters(page_number=page_number, page_size=page_size)


def get_tournament_request_parameters(
    params: RequestParameters = Depends(get_request_parameters),
    include_games: bool = Query(default=False, alias="includeGames"),
) -> TournamentRequestParameters:
    return TournamentRequestParameters(
        page_number=params.page_number,
        page_size=params.page_size,
        include_games=include_games,
    )


def require_json_patch(request: Request) -> None:
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != JSON_PATCH_MEDIA_TYPE:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"PATCH requests must use {JSON_PATCH_MEDIA_TYPE}",
        )


def get_health_check_service(settings: Settings = Depends(get_settings)) -> HealthCheckService:
    return HealthCheckService.from_settings(settings, engine)
