import logging
from typing import Any

from app.config import Settings
from app.models import Game, Tournament
from app.repositories import UnitOfWork
from app.schemas.game import GameCreateDto, GameDto, GameUpdateDto
from app.schemas.request_parameters import RequestParameters
from app.schemas.responses import ApiResponse
from app.services.patching import (
    PatchDocumentError,
    PatchValidationError,
    apply_patch,
    parse_patch_document,
)
from app.utils.date_helpers import is_within_window
from app.utils.pagination import MetaData

logger = logging.getLogger(__name__)


class GameService:
    def __init__(self, uow: UnitOfWork, settings: Settings):
        self.uow = uow
        self.max_games = settings.max_games_per_tournament

    async def get_games(
        self, params: RequestParameters, tournament_id: int
    ) -> tuple[ApiResponse, MetaData | None]:
        if not await self.uow.tournaments.any(tournament_id):
            return ApiResponse.tournament_not_found(tournament_id), None

        paged = await self.uow.games.get_paged_by_tournament(tournament_id, params)
        if paged.exceeds_last_page:
            adjusted = params.model_copy(update={"page_number": paged.meta_data.total_pages})
            paged = await self.uow.games.get_paged_by_tournament(tournament_id, adjusted)

        items = [GameDto.model_validate(game) for game in paged.items]
        return ApiResponse.ok(items), paged.meta_data

    async def get_game(self, tournament_id: int, game_id: int) -> ApiResponse:
        tournament, game, failure = await self._find_game(tournament_id, game_id)
        if failure is not None:
            return failure
        return ApiResponse.ok(GameDto.model_validate(game))

    async def get_game_by_title(self, tournament_id: int, title: str) -> ApiResponse:
        if not await self.uow.tournaments.any(tournament_id):
            return ApiResponse.tournament_not_found(tournament_id)

        game = await self.uow.games.get_by_title(tournament_id, title)
        if game is None:
            return ApiResponse.game_not_found_by_title(title)
        return ApiResponse.ok(GameDto.model_validate(game))

    async def exists(self, game_id: int) -> ApiResponse:
        if not await self.uow.games.any(game_id):
            return ApiResponse.game_not_found_by_id(game_id)
        return ApiResponse.ok(True)

    async def add(self, tournament_id: int, dto: GameCreateDto) -> ApiResponse:
        """Insert a game.

        Duplicates are reported before the game limit, and the limit before
        the scheduling window.
        """
        tournament = await self.uow.tournaments.get(tournament_id)
        if tournament is None:
            return ApiResponse.tournament_not_found(tournament_id)

        if await self.uow.games.exists_by_name_and_date(tournament_id, dto.title, dto.time):
            logger.warning("Game %r at %s already exists in tournament %s", dto.title, dto.time, tournament_id)
            return ApiResponse.already_exists(
                f'A game named "{dto.title}" already exists on {dto.time:%Y-%m-%d %H:%M}.'
            )

        if await self.uow.games.count_by_tournament(tournament_id) >= self.max_games:
            logger.warning("Tournament %s reached the limit of %s games", tournament_id, self.max_games)
            return ApiResponse.max_limit_reached(tournament_id, self.max_games)

        window_failure = self._check_window(dto.time, tournament)
        if window_failure is not None:
            return window_failure

        game = Game(title=dto.title, time=dto.time, tournament_id=tournament_id)
        self.uow.games.add(game)
        if await self.uow.complete() == 0:
            logger.warning("Creating game %r in tournament %s saved no rows", dto.title, tournament_id)
            return ApiResponse.save_failed("Failed to save the new game.")

        logger.info("Created game %s in tournament %s", game.id, tournament_id)
        return ApiResponse.ok(GameDto.model_validate(game))

    async def update(self, tournament_id: int, game_id: int, dto: GameUpdateDto) -> ApiResponse:
        tournament, game, failure = await self._find_game(tournament_id, game_id)
        if failure is not None:
            return failure
        return await self._save_changes(tournament, game, dto)

    async def apply_patch(self, tournament_id: int, game_id: int, document: Any) -> ApiResponse:
        """Apply a JSON patch to a game.

        Checks run in a fixed order and the first failure wins: document
        shape, tournament, game, patch application, schema validation,
        scheduling window, no-op detection, duplicate title and time,
        persistence.
        """
        try:
            patch = parse_patch_document(document)
        except PatchDocumentError as exc:
            return ApiResponse.bad_patch_document(exc.errors)

        tournament, game, failure = await self._find_game(tournament_id, game_id)
        if failure is not None:
            return failure

        current = GameUpdateDto(title=game.title, time=game.time)
        try:
            patched = apply_patch(patch, current)
        except PatchDocumentError as exc:
            return ApiResponse.bad_patch_document(exc.errors)
        except PatchValidationError as exc:
            return ApiResponse.unprocessable_content("The patched game is invalid.", exc.errors)

        return await self._save_changes(tournament, game, patched)

    async def remove(self, tournament_id: int, game_id: int) -> ApiResponse:
        tournament, game, failure = await self._find_game(tournament_id, game_id)
        if failure is not None:
            return failure

        await self.uow.games.remove(game)
        if await self.uow.complete() == 0:
            logger.warning("Deleting game %s saved no rows", game_id)
            return ApiResponse.save_failed(f"Could not delete game {game_id}.")

        logger.info("Deleted game %s from tournament %s", game_id, tournament_id)
        return ApiResponse.ok(message=f"Game with ID {game_id} has been deleted successfully.")

    async def _find_game(
        self, tournament_id: int, game_id: int
    ) -> tuple[Tournament | None, Game | None, ApiResponse | None]:
        tournament = await self.uow.tournaments.get(tournament_id)
        if tournament is None:
            return None, None, ApiResponse.tournament_not_found(tournament_id)

        game = await self.uow.games.get_by_id(game_id)
        if game is None:
            return tournament, None, ApiResponse.game_not_found_by_id(game_id)
        if game.tournament_id != tournament_id:
            return tournament, None, ApiResponse.game_not_in_tournament(game_id, tournament_id)
        return tournament, game, None

    def _check_window(self, time, tournament: Tournament) -> ApiResponse | None:
        if is_within_window(time, tournament.start_date, tournament.end_date):
            return None
        return ApiResponse.unprocessable_content(
            f"Game time must be within the tournament period "
            f"{tournament.start_date:%Y-%m-%d %H:%M} - {tournament.end_date:%Y-%m-%d %H:%M}."
        )

    async def _save_changes(self, tournament: Tournament, game: Game, dto: GameUpdateDto) -> ApiResponse:
        window_failure = self._check_window(dto.time, tournament)
        if window_failure is not None:
            return window_failure

        if dto.title == game.title and dto.time == game.time:
            return ApiResponse.not_modified(f"Game {game.id} is already up to date.")

        if await self.uow.games.exists_by_name_and_date(tournament.id, dto.title, dto.time):
            logger.warning("Game %r at %s already exists in tournament %s", dto.title, dto.time, tournament.id)
            return ApiResponse.already_exists(
                f'A game named "{dto.title}" already exists on {dto.time:%Y-%m-%d %H:%M}.'
            )

        game.title = dto.title
        game.time = dto.time
        self.uow.games.update(game)
        if await self.uow.complete() == 0:
            logger.warning("Updating game %s saved no rows", game.id)
            return ApiResponse.save_failed("Update failed. No changes were saved.")

        logger.info("Updated game %s in tournament %s", game.id, tournament.id)
        return ApiResponse.ok(GameDto.model_validate(game))
