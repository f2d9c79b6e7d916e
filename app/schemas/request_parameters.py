from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config import get_settings


def _default_page_size() -> int:
    return get_settings().default_page_size


class RequestParameters(BaseModel):
    """Paging input shared by list endpoints."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default_factory=_default_page_size)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int) -> int:
        # Out-of-range sizes fall back to the maximum, not to the nearest bound.
        settings = get_settings()
        if value < settings.min_page_size or value > settings.max_page_size:
            return settings.max_page_size
        return value


class TournamentRequestParameters(RequestParameters):
    include_games: bool = False
