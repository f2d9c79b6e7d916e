from app.schemas.common import CamelModel, OutcomeEnvelope, ProblemDetails
from app.schemas.game import GameCreateDto, GameDto, GameUpdateDto
from app.schemas.request_parameters import RequestParameters, TournamentRequestParameters
from app.schemas.responses import ApiResponse, OutcomeKind, UnexpectedOutcomeError
from app.schemas.tournament import TournamentCreateDto, TournamentDto, TournamentUpdateDto

__all__ = [
    "CamelModel",
    "OutcomeEnvelope",
    "ProblemDetails",
    "GameCreateDto",
    "GameDto",
    "GameUpdateDto",
    "RequestParameters",
    "TournamentRequestParameters",
    "ApiResponse",
    "OutcomeKind",
    "UnexpectedOutcomeError",
    "TournamentCreateDto",
    "TournamentDto",
    "TournamentUpdateDto",
]
