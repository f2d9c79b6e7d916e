from datetime import datetime

from pydantic import ConfigDict, Field, computed_field, field_validator

from app.models import Tournament
from app.schemas.common import CamelModel
from app.schemas.game import GameDto
from app.utils.date_helpers import to_naive_utc, tournament_end_date


class TournamentDto(CamelModel):
    id: int
    title: str
    start_date: datetime
    games: list[GameDto] = Field(default_factory=list)

    @computed_field(alias="endDate")
    @property
    def end_date(self) -> datetime:
        return tournament_end_date(self.start_date)

    @classmethod
    def from_entity(cls, tournament: Tournament, include_games: bool = False) -> "TournamentDto":
        # Only touch the relationship when it was eager-loaded; lazy loads are not allowed on AsyncSession.
        games = (
            [GameDto.model_validate(game) for game in tournament.games]
            if include_games
            else []
        )
        return cls(
            id=tournament.id,
            title=tournament.title,
            start_date=tournament.start_date,
            games=games,
        )


class TournamentCreateDto(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=100)
    start_date: datetime

    @field_validator("start_date")
    @classmethod
    def normalize_start_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class TournamentUpdateDto(CamelModel):
    """Full replacement body for PUT, and the document a tournament patch is applied to."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(min_length=1, max_length=100)
    start_date: datetime

    @field_validator("start_date")
    @classmethod
    def normalize_start_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)
