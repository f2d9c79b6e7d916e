from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import get_request_parameters, get_service_manager, require_json_patch
from app.api.responses import bad_id, problem_response
from app.schemas.common import OutcomeEnvelope
from app.schemas.game import GameCreateDto, GameDto, GameUpdateDto
from app.schemas.request_parameters import RequestParameters
from app.services.service_manager import ServiceManager

router = APIRouter(prefix="/tournaments/{tournament_id}/games", tags=["games"])


def _check_ids(request: Request, tournament_id: int, game_id: int | None = None) -> Response | None:
    if tournament_id <= 0:
        return bad_id("Tournament id", tournament_id, request)
    if game_id is not None and game_id <= 0:
        return bad_id("Game id", game_id, request)
    return None


@router.get("", response_model=list[GameDto])
async def list_games(
    tournament_id: int,
    request: Request,
    response: Response,
    params: RequestParameters = Depends(get_request_parameters),
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id)
    if invalid is not None:
        return invalid

    outcome, meta_data = await services.game_service.get_games(params, tournament_id)
    if not outcome.success:
        return problem_response(outcome, request)

    response.headers["X-Pagination"] = meta_data.to_header()
    return outcome.get_ok_result(list)


@router.get("/byTitle/{title}", response_model=GameDto)
async def get_game_by_title(
    tournament_id: int,
    title: str,
    request: Request,
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id)
    if invalid is not None:
        return invalid

    outcome = await services.game_service.get_game_by_title(tournament_id, title)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(GameDto)


@router.get("/{game_id}", response_model=GameDto, name="get_game")
async def get_game(
    tournament_id: int,
    game_id: int,
    request: Request,
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id, game_id)
    if invalid is not None:
        return invalid

    outcome = await services.game_service.get_game(tournament_id, game_id)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(GameDto)


@router.post("", response_model=GameDto, status_code=status.HTTP_201_CREATED)
async def create_game(
    tournament_id: int,
    body: GameCreateDto,
    request: Request,
    response: Response,
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id)
    if invalid is not None:
        return invalid

    outcome = await services.game_service.add(tournament_id, body)
    if not outcome.success:
        return problem_response(outcome, request)

    created = outcome.get_ok_result(GameDto)
    response.headers["Location"] = str(
        request.url_for("get_game", tournament_id=tournament_id, game_id=created.id)
    )
    return created


@router.put("/{game_id}", response_model=GameDto)
async def update_game(
    tournament_id: int,
    game_id: int,
    body: GameUpdateDto,
    request: Request,
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id, game_id)
    if invalid is not None:
        return invalid

    outcome = await services.game_service.update(tournament_id, game_id, body)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(GameDto)


@router.patch(
    "/{game_id}",
    response_model=GameDto,
    dependencies=[Depends(require_json_patch)],
)
async def patch_game(
    tournament_id: int,
    game_id: int,
    request: Request,
    document: Any = Body(default=None),
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id, game_id)
    if invalid is not None:
        return invalid

    outcome = await services.game_service.apply_patch(tournament_id, game_id, document)
    if not outcome.success:
        return problem_response(outcome, request)
    return outcome.get_ok_result(GameDto)


@router.delete("/{game_id}", response_model=OutcomeEnvelope)
async def delete_game(
    tournament_id: int,
    game_id: int,
    request: Request,
    services: ServiceManager = Depends(get_service_manager),
):
    invalid = _check_ids(request, tournament_id, game_id)
    if invalid is not None:
        return invalid

    outcome = await services.game_service.remove(tournament_id, game_id)
    if not outcome.success:
        return problem_response(outcome, request)
    return JSONResponse(outcome.to_envelope())
