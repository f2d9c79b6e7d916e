"""Common schema base and response shapes shared across endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProblemDetails(CamelModel):
    title: str
    detail: str | None = None
    status: int
    instance: str = "/"
    timestamp: datetime
    errors: list[str] | None = None


class OutcomeEnvelope(CamelModel):
    success: bool
    message: str | None = None
    status_code: int
    timestamp: datetime
    errors: list[str] | None = None
    result: Any | None = None
