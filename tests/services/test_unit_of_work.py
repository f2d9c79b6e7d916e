from datetime import datetime

import pytest

from app.config import Settings
from app.models import Tournament
from app.repositories import UnitOfWork
from app.services.game_service import GameService
from app.services.service_manager import ServiceManager
from app.services.tournament_service import TournamentService


@pytest.mark.asyncio
class TestUnitOfWork:
    async def test_complete_counts_written_entities(self, test_session):
        uow = UnitOfWork(test_session)
        uow.tournaments.add(Tournament(title="A", start_date=datetime(2025, 1, 1)))
        uow.tournaments.add(Tournament(title="B", start_date=datetime(2025, 2, 1)))

        assert await uow.complete() == 2

    async def test_complete_without_changes_is_zero(self, test_session):
        assert await UnitOfWork(test_session).complete() == 0

    async def test_unchanged_assignment_is_not_counted(self, test_session, sample_tournament):
        uow = UnitOfWork(test_session)
        sample_tournament.title = sample_tournament.title
        uow.tournaments.update(sample_tournament)

        assert await uow.complete() == 0


def test_service_manager_builds_both_services():
    uow = UnitOfWork(session=None)
    manager = ServiceManager(uow, Settings(max_games_per_tournament=4))

    assert isinstance(manager.tournament_service, TournamentService)
    assert isinstance(manager.game_service, GameService)
    assert manager.tournament_service.uow is manager.game_service.uow is uow
    assert manager.game_service.max_games == 4
