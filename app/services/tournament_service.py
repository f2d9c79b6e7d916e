import logging
from typing import Any

from app.models import Tournament
from app.repositories import UnitOfWork
from app.schemas.request_parameters import TournamentRequestParameters
from app.schemas.responses import ApiResponse
from app.schemas.tournament import TournamentCreateDto, TournamentDto, TournamentUpdateDto
from app.services.patching import (
    PatchDocumentError,
    PatchValidationError,
    apply_patch,
    parse_patch_document,
)
from app.utils.date_helpers import is_within_window, tournament_end_date
from app.utils.pagination import MetaData

logger = logging.getLogger(__name__)


class TournamentService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_all(
        self, params: TournamentRequestParameters
    ) -> tuple[ApiResponse, MetaData]:
        """Return one page of tournaments.

        A page number past the last page is moved back to the last page.
        """
        paged = await self.uow.tournaments.get_paged(params)
        if paged.exceeds_last_page:
            adjusted = params.model_copy(update={"page_number": paged.meta_data.total_pages})
            paged = await self.uow.tournaments.get_paged(adjusted)

        items = [
            TournamentDto.from_entity(tournament, include_games=params.include_games)
            for tournament in paged.items
        ]
        return ApiResponse.ok(items), paged.meta_data

    async def get_by_id(self, tournament_id: int, include_games: bool = False) -> ApiResponse:
        tournament = await self.uow.tournaments.get(tournament_id, include_games=include_games)
        if tournament is None:
            return ApiResponse.tournament_not_found(tournament_id)
        return ApiResponse.ok(TournamentDto.from_entity(tournament, include_games=include_games))

    async def exists(self, tournament_id: int) -> ApiResponse:
        if not await self.uow.tournaments.any(tournament_id):
            return ApiResponse.tournament_not_found(tournament_id)
        return ApiResponse.ok(True)

    async def exists_by_title_and_start(self, title: str, start_date) -> bool:
        return await self.uow.tournaments.exists_by_title_and_start_date(title, start_date)

    async def create(self, dto: TournamentCreateDto) -> ApiResponse:
        if await self.exists_by_title_and_start(dto.title, dto.start_date):
            logger.warning("Tournament %r starting %s already exists", dto.title, dto.start_date)
            return ApiResponse.already_exists(
                f"A tournament with title {dto.title} and the same start date already exists."
            )

        tournament = Tournament(title=dto.title, start_date=dto.start_date)
        self.uow.tournaments.add(tournament)
        if await self.uow.complete() == 0:
            logger.warning("Creating tournament %r saved no rows", dto.title)
            return ApiResponse.save_failed("Could not save the newly created tournament.")

        logger.info("Created tournament %s (%r)", tournament.id, tournament.title)
        return ApiResponse.ok(TournamentDto.from_entity(tournament))

    async def update(self, tournament_id: int, dto: TournamentUpdateDto) -> ApiResponse:
        tournament = await self.uow.tournaments.get(tournament_id)
        if tournament is None:
            return ApiResponse.tournament_not_found(tournament_id)
        return await self._save_changes(tournament, dto)

    async def apply_patch(self, tournament_id: int, document: Any) -> ApiResponse:
        try:
            patch = parse_patch_document(document)
        except PatchDocumentError as exc:
            return ApiResponse.bad_patch_document(exc.errors)

        tournament = await self.uow.tournaments.get(tournament_id)
        if tournament is None:
            return ApiResponse.tournament_not_found(tournament_id)

        current = TournamentUpdateDto(title=tournament.title, start_date=tournament.start_date)
        try:
            patched = apply_patch(patch, current)
        except PatchDocumentError as exc:
            return ApiResponse.bad_patch_document(exc.errors)
        except PatchValidationError as exc:
            return ApiResponse.unprocessable_content("The patched tournament is invalid.", exc.errors)

        return await self._save_changes(tournament, patched)

    async def remove(self, tournament_id: int) -> ApiResponse:
        tournament = await self.uow.tournaments.get(tournament_id, include_games=True)
        if tournament is None:
            return ApiResponse.tournament_not_found(tournament_id)

        await self.uow.tournaments.remove(tournament)
        if await self.uow.complete() == 0:
            logger.warning("Deleting tournament %s saved no rows", tournament_id)
            return ApiResponse.save_failed(f"Could not delete tournament {tournament_id}.")

        logger.info("Deleted tournament %s", tournament_id)
        return ApiResponse.ok(message=f"Tournament with ID {tournament_id} has been deleted successfully.")

    async def _save_changes(self, tournament: Tournament, dto: TournamentUpdateDto) -> ApiResponse:
        if dto.title == tournament.title and dto.start_date == tournament.start_date:
            return ApiResponse.not_modified(f"Tournament {tournament.id} is already up to date.")

        if await self.exists_by_title_and_start(dto.title, dto.start_date):
            logger.warning("Tournament %r starting %s already exists", dto.title, dto.start_date)
            return ApiResponse.already_exists(
                f"A tournament with title {dto.title} and the same start date already exists."
            )

        if dto.start_date != tournament.start_date:
            end_date = tournament_end_date(dto.start_date)
            games = await self.uow.games.get_by_tournament(tournament.id)
            outside = [
                game.title for game in games
                if not is_within_window(game.time, dto.start_date, end_date)
            ]
            if outside:
                return ApiResponse.unprocessable_content(
                    "Moving the start date would leave games outside the tournament period.",
                    [f"Game '{title}' is outside {dto.start_date} - {end_date}." for title in outside],
                )

        tournament.title = dto.title
        tournament.start_date = dto.start_date
        self.uow.tournaments.update(tournament)
        if await self.uow.complete() == 0:
            logger.warning("Updating tournament %s saved no rows", tournament.id)
            return ApiResponse.save_failed(f"Could not save changes to tournament {tournament.id}.")

        logger.info("Updated tournament %s", tournament.id)
        return ApiResponse.ok(TournamentDto.from_entity(tournament))
