from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common import CamelModel
from app.utils.date_helpers import to_naive_utc


class GameDto(CamelModel):
    id: int
    title: str
    time: datetime
    tournament_id: int


class GameCreateDto(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=3, max_length=100)
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class GameUpdateDto(CamelModel):
    """Full replacement body for PUT, and the document a game patch is applied to."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(min_length=1, max_length=100)
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_naive_utc(value)
