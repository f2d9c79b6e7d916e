from datetime import datetime

from sqlalchemy import exists, select
from sqlalchemy.orm import selectinload

from app.models import Tournament
from app.repositories.base import RepositoryBase
from app.schemas.request_parameters import TournamentRequestParameters
from app.utils.pagination import PagedList


class TournamentRepository(RepositoryBase[Tournament]):
    model = Tournament

    async def get(self, tournament_id: int, include_games: bool = False) -> Tournament | None:
        stmt = self.find_by_condition(Tournament.id == tournament_id)
        if include_games:
            stmt = stmt.options(selectinload(Tournament.games))
        return await self.first(stmt)

    async def get_paged(self, params: TournamentRequestParameters) -> PagedList[Tournament]:
        options = (selectinload(Tournament.games),) if params.include_games else ()
        return await PagedList.create(
            self.session,
            self.find_all().order_by(Tournament.start_date, Tournament.id),
            params.page_number,
            params.page_size,
            options=options,
        )

    async def exists_by_title_and_start_date(self, title: str, start_date: datetime) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    Tournament.title == title,
                    Tournament.start_date == start_date,
                )
            )
        )
        return bool(result.scalar())

    async def has_any(self) -> bool:
        result = await self.session.execute(select(exists().where(Tournament.id.is_not(None))))
        return bool(result.scalar())
