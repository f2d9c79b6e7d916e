from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import (
    get_service_manager,
    get_tournament_request_parameters,
    require_json_patch,
)
from app.api.responses import bad_id, problem_response
from app.schemas.common import OutcomeEnvelope
from app.schemas.request_parameters import TournamentRequestParameters
from app.schemas.tournament import TournamentCreateDto, TournamentDto, TournamentUpdateDto
from app.services.service_manager import ServiceManager

router = APIRouter(prefix="/tournaments", tags=["tournaments"])


@router.get("", response_model=list[TournamentDto])
async def list_tournaments(
    response: Response,
    params: TournamentRequestParameters = Depends(get_tournament_request_parameters),
    services: ServiceManager = Depends(get_service_manager),
):
    outcome, meta_data = await services.tournament_service.get_all(params)
    response.headers["X-Pagination"] = meta_data.to_header()
    return outcome.get_ok_result(list)


@router.get("/{tournament_id}", response_model=TournamentDto, name="get_tournament")
async def get_tournament(
    tournament_id: int,
    request: Request,
    include_games: bool = Query(default=False, alias="includeGames"),
    services: ServiceManager = Depends(get_service_manager),
):
    if tournament_id <= 0:
        return bad_id("Tournament id", tournament_id, request)

    outcome = await services.tournament_service.get_by_id(tournament_id, include_games)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(TournamentDto)


@router.post("", response_model=TournamentDto, status_code=status.HTTP_201_CREATED)
async def create_tournament(
    body: TournamentCreateDto,
    request: Request,
    response: Response,
    services: ServiceManager = Depends(get_service_manager),
):
    outcome = await services.tournament_service.create(body)
    if not outcome.success:
        return problem_response(outcome, request)

    created = outcome.get_ok_result(TournamentDto)
    response.headers["Location"] = str(request.url_for("get_tournament", tournament_id=created.id))
    return created


@router.put("/{tournament_id}", response_model=TournamentDto)
async def update_tournament(
    tournament_id: int,
    body: TournamentUpdateDto,
    request: Request,
    services: ServiceManager = Depends(get_service_manager),
):
    if tournament_id <= 0:
        return bad_id("Tournament id", tournament_id, request)

    outcome = await services.tournament_service.update(tournament_id, body)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(TournamentDto)


@router.patch(
    "/{tournament_id}",
    response_model=TournamentDto,
    dependencies=[Depends(require_json_patch)],
)
async def patch_tournament(
    tournament_id: int,
    request: Request,
    document: Any = Body(default=None),
    services: ServiceManager = Depends(get_service_manager),
):
    if tournament_id <= 0:
        return bad_id("Tournament id", tournament_id, request)

    outcome = await services.tournament_service.apply_patch(tournament_id, document)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(TournamentDto)


@router.delete("/{tournament_id}", response_model=OutcomeEnvelope)
async def delete_tournament(
    tournament_id: int,
    request: Request,
    services: ServiceManager = Depends(get_service_manager),
):
    if tournament_id <= 0:
        return bad_id("Tournament id", tournament_id, request)

    outcome = await services.tournament_service.remove(tournament_id)
    if not outcome.success:
        return problem_response(outcome, request)
    return JSONResponse(outcome.to_envelope())
