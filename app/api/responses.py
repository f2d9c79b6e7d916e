"""Translation of service outcomes into HTTP responses."""

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.schemas.common import ProblemDetails
from app.schemas.responses import ApiResponse, OutcomeKind
from app.utils.date_helpers import utcnow

PROBLEM_MEDIA_TYPE = "application/problem+json"

TITLES: dict[OutcomeKind, str] = {
    OutcomeKind.tournament_not_found: "Tournament Not Found",
    OutcomeKind.game_not_found_by_id: "Game Not Found",
    OutcomeKind.game_not_found_by_title: "Game Not Found",
    OutcomeKind.game_not_in_tournament: "Game Not In Tournament",
    OutcomeKind.already_exists: "Already Exists",
    OutcomeKind.max_limit_reached: "Max Limit Reached",
    OutcomeKind.save_failed: "Save Failed",
    OutcomeKind.bad_request: "Bad Request",
    OutcomeKind.bad_patch_document: "Invalid Patch Document",
    OutcomeKind.unprocessable_content: "Unprocessable Content",
    OutcomeKind.no_changes_made: "No Changes Made",
}


def problem(
    status_code: int,
    title: str,
    detail: str | None,
    instance: str,
    errors: list[str] | None = None,
) -> JSONResponse:
    body = ProblemDetails(
        title=title,
        detail=detail,
        status=status_code,
        instance=instance,
        timestamp=utcnow(),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, by_alias=True, exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def problem_response(outcome: ApiResponse, request: Request) -> Response:
    """HTTP response for a failed outcome. ``not_modified`` has no body."""
    if outcome.success:
        raise ValueError("problem_response() called with an ok outcome")
    if outcome.kind is OutcomeKind.not_modified:
        return Response(status_code=outcome.status_code)

    return problem(
        outcome.status_code,
        TITLES[outcome.kind],
        outcome.message,
        request.url.path,
        list(outcome.errors),
    )


def bad_id(name: str, value: int, request: Request) -> Response:
    return problem_response(
        ApiResponse.bad_request(f"{name} must be a positive integer, got {value}."),
        request,
    )
