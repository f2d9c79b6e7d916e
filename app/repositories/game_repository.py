from datetime import datetime

from sqlalchemy import exists, func, select

from app.models import Game
from app.repositories.base import RepositoryBase
from app.schemas.request_parameters import RequestParameters
from app.utils.pagination import PagedList


class GameRepository(RepositoryBase[Game]):
    model = Game

    async def get_by_id(self, game_id: int) -> Game | None:
        return await self.first(self.find_by_condition(Game.id == game_id))

    async def get_by_title(self, tournament_id: int, title: str) -> Game | None:
        return await self.first(
            self.find_by_condition(Game.tournament_id == tournament_id, Game.title == title)
            .order_by(Game.time)
        )

    async def get_by_tournament(self, tournament_id: int) -> list[Game]:
        result = await self.session.execute(
            self.find_by_condition(Game.tournament_id == tournament_id).order_by(Game.title, Game.id)
        )
        return list(result.scalars().all())

    async def get_paged_by_tournament(
        self, tournament_id: int, params: RequestParameters
    ) -> PagedList[Game]:
        return await PagedList.create(
            self.session,
            self.find_by_condition(Game.tournament_id == tournament_id).order_by(Game.title, Game.id),
            params.page_number,
            params.page_size,
        )

    async def exists_by_name_and_date(self, tournament_id: int, title: str, time: datetime) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    Game.tournament_id == tournament_id,
                    Game.title == title,
                    Game.time == time,
                )
            )
        )
        return bool(result.scalar())

    async def count_by_tournament(self, tournament_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Game).where(Game.tournament_id == tournament_id)
        )
        return result.scalar() or 0
