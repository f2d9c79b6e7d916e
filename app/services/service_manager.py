from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.repositories import UnitOfWork
from app.services.game_service import GameService
from app.services.tournament_service import TournamentService


class ServiceManager:
    """Services for one request, built together over a shared unit of work."""

    def __init__(self, uow: UnitOfWork, settings: Settings):
        self.uow = uow
        self.tournament_service = TournamentService(uow)
        self.game_service = GameService(uow, settings)

    @classmethod
    def for_session(cls, session: AsyncSession, settings: Settings) -> "ServiceManager":
        return cls(UnitOfWork(session), settings)
