from app.repositories.base import RepositoryBase
from app.repositories.game_repository import GameRepository
from app.repositories.tournament_repository import TournamentRepository
from app.repositories.unit_of_work import UnitOfWork

__all__ = [
    "RepositoryBase",
    "GameRepository",
    "TournamentRepository",
    "UnitOfWork",
]
