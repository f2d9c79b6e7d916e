from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy import func, select

from app.models import Game, Tournament
from app.repositories import UnitOfWork
from app.schemas.request_parameters import TournamentRequestParameters
from app.schemas.responses import OutcomeKind
from app.schemas.tournament import TournamentCreateDto, TournamentDto, TournamentUpdateDto
from app.services.tournament_service import TournamentService


def make_service(session) -> TournamentService:
    return TournamentService(UnitOfWork(session))


@pytest.mark.asyncio
class TestTournamentQueries:
    async def test_get_all_returns_page_and_metadata(self, test_session, many_tournaments):
        outcome, meta = await make_service(test_session).get_all(
            TournamentRequestParameters(page_number=2, page_size=10)
        )

        assert [t.title for t in outcome.result] == [f"League {i:02d}" for i in range(10, 20)]
        assert meta.current_page == 2
        assert meta.total_pages == 3
        assert meta.total_count == 25
        assert meta.has_next and meta.has_previous

    async def test_page_past_the_end_is_moved_to_last_page(self, test_session, many_tournaments):
        outcome, meta = await make_service(test_session).get_all(
            TournamentRequestParameters(page_number=10, page_size=10)
        )

        assert meta.current_page == 3
        assert len(outcome.result) == 5
        assert meta.has_next is False

    async def test_empty_store(self, test_session):
        outcome, meta = await make_service(test_session).get_all(TournamentRequestParameters())

        assert outcome.result == []
        assert meta.total_pages == 0

    async def test_include_games(self, test_session, sample_tournament, sample_games):
        outcome, _ = await make_service(test_session).get_all(
            TournamentRequestParameters(include_games=True)
        )

        assert [game.title for game in outcome.result[0].games] == ["Final", "Opening Match"]

    async def test_get_by_id(self, test_session, sample_tournament):
        outcome = await make_service(test_session).get_by_id(sample_tournament.id)

        dto = outcome.get_ok_result(TournamentDto)
        assert dto.title == "Winter Cup"
        assert dto.end_date == datetime(2025, 4, 15, 10, 0)

    async def test_get_by_id_missing(self, test_session):
        outcome = await make_service(test_session).get_by_id(42)

        assert outcome.kind is OutcomeKind.tournament_not_found
        assert outcome.message == "Tournament with id 42 not found."

    async def test_exists(self, test_session, sample_tournament):
        service = make_service(test_session)

        assert (await service.exists(sample_tournament.id)).success
        assert (await service.exists(999)).kind is OutcomeKind.tournament_not_found
        assert await service.exists_by_title_and_start("Winter Cup", datetime(2025, 1, 15, 10, 0))
        assert not await service.exists_by_title_and_start("Winter Cup", datetime(2025, 1, 16))


@pytest.mark.asyncio
class TestTournamentWrites:
    async def test_create(self, test_session):
        dto = TournamentCreateDto(title="Summer Cup", start_date=datetime(2025, 6, 1))

        outcome = await make_service(test_session).create(dto)

        created = outcome.get_ok_result(TournamentDto)
        assert created.id is not None
        assert created.end_date == datetime(2025, 9, 1)

    async def test_create_duplicate(self, test_session, sample_tournament):
        dto = TournamentCreateDto(title="Winter Cup", start_date=datetime(2025, 1, 15, 10, 0))

        outcome = await make_service(test_session).create(dto)

        assert outcome.kind is OutcomeKind.already_exists

    async def test_patch_title(self, test_session, sample_tournament):
        outcome = await make_service(test_session).apply_patch(
            sample_tournament.id, [{"op": "replace", "path": "/title", "value": "Winter Classic"}]
        )

        assert outcome.get_ok_result(TournamentDto).title == "Winter Classic"

    async def test_patch_end_date_is_rejected(self, test_session, sample_tournament):
        outcome = await make_service(test_session).apply_patch(
            sample_tournament.id,
            [{"op": "replace", "path": "/endDate", "value": "2026-01-01T00:00:00"}],
        )

        assert outcome.kind is OutcomeKind.bad_patch_document

    async def test_patch_missing_tournament(self, test_session):
        outcome = await make_service(test_session).apply_patch(
            9, [{"op": "replace", "path": "/title", "value": "Winter Classic"}]
        )

        assert outcome.kind is OutcomeKind.tournament_not_found

    async def test_put_onto_another_tournament_conflicts(self, test_session, sample_tournament, other_tournament):
        dto = TournamentUpdateDto(title=sample_tournament.title, start_date=sample_tournament.start_date)

        outcome = await make_service(test_session).update(other_tournament.id, dto)

        assert outcome.kind is OutcomeKind.already_exists
        assert (await test_session.get(Tournament, other_tournament.id)).title == "Spring Open"

    async def test_patch_onto_another_tournament_conflicts(self, test_session, sample_tournament, other_tournament):
        outcome = await make_service(test_session).apply_patch(
            other_tournament.id,
            [
                {"op": "replace", "path": "/title", "value": "Winter Cup"},
                {"op": "replace", "path": "/startDate", "value": "2025-01-15T10:00:00"},
            ],
        )

        assert outcome.kind is OutcomeKind.already_exists
        assert outcome.status_code == 409

    async def test_moving_start_date_away_from_games(self, test_session, sample_tournament, sample_games):
        dto = TournamentUpdateDto(title="Winter Cup", start_date=datetime(2025, 2, 1))

        outcome = await make_service(test_session).update(sample_tournament.id, dto)

        assert outcome.kind is OutcomeKind.unprocessable_content
        assert any("Opening Match" in error for error in outcome.errors)

    async def test_moving_start_date_keeping_games_inside(self, test_session, sample_tournament, sample_games):
        dto = TournamentUpdateDto(title="Winter Cup", start_date=datetime(2025, 1, 10))

        outcome = await make_service(test_session).update(sample_tournament.id, dto)

        assert outcome.get_ok_result(TournamentDto).end_date == datetime(2025, 4, 10)

    async def test_put_with_same_values_is_not_modified(self, test_session, sample_tournament):
        dto = TournamentUpdateDto(title="Winter Cup", start_date=datetime(2025, 1, 15, 10, 0))

        outcome = await make_service(test_session).update(sample_tournament.id, dto)

        assert outcome.kind is OutcomeKind.not_modified

    async def test_remove_deletes_games(self, test_session, sample_tournament, sample_games):
        tournament_id = sample_tournament.id

        outcome = await make_service(test_session).remove(tournament_id)

        assert outcome.success
        assert await test_session.get(Tournament, tournament_id) is None
        result = await test_session.execute(
            select(func.count()).select_from(Game).where(Game.tournament_id == tournament_id)
        )
        assert result.scalar() == 0

    async def test_remove_missing(self, test_session):
        outcome = await make_service(test_session).remove(3)

        assert outcome.kind is OutcomeKind.tournament_not_found


@pytest.mark.asyncio
async def test_update_that_writes_nothing_is_save_failed():
    tournament = Tournament(id=1, title="Winter Cup", start_date=datetime(2025, 1, 15))
    uow = Mock()
    uow.tournaments.get = AsyncMock(return_value=tournament)
    uow.tournaments.exists_by_title_and_start_date = AsyncMock(return_value=False)
    uow.tournaments.update = Mock()
    uow.complete = AsyncMock(return_value=0)

    outcome = await TournamentService(uow).update(
        1, TournamentUpdateDto(title="Winter Classic", start_date=datetime(2025, 1, 15))
    )

    assert outcome.kind is OutcomeKind.save_failed
