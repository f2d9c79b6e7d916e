from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.game_repository import GameRepository
from app.repositories.tournament_repository import TournamentRepository


class UnitOfWork:
    """Repositories sharing one session, committed together."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tournaments = TournamentRepository(session)
        self.games = GameRepository(session)

    def pending_changes(self) -> int:
        session = self.session
        modified = sum(1 for obj in session.dirty if session.is_modified(obj))
        return len(session.new) + modified + len(session.deleted)

    async def complete(self) -> int:
        """Commit staged changes and return how many entities were written."""
        changes = self.pending_changes()
        await self.session.commit()
        return changes
