"""Outcome of a service operation.

Every service method returns exactly one ``ApiResponse``. Expected domain
conditions (missing entities, conflicts, validation failures) are values of
``OutcomeKind``; they are never raised. Routers translate an outcome into an
HTTP response by matching on ``kind``.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from app.utils.date_helpers import utcnow

T = TypeVar("T")


class UnexpectedOutcomeError(RuntimeError):
    """Raised when a caller unwraps an outcome that is not the expected OK result."""


class OutcomeKind(str, enum.Enum):
    ok = "ok"
    tournament_not_found = "tournament_not_found"
    game_not_found_by_id = "game_not_found_by_id"
    game_not_found_by_title = "game_not_found_by_title"
    game_not_in_tournament = "game_not_in_tournament"
    already_exists = "already_exists"
    max_limit_reached = "max_limit_reached"
    save_failed = "save_failed"
    bad_request = "bad_request"
    bad_patch_document = "bad_patch_document"
    unprocessable_content = "unprocessable_content"
    not_modified = "not_modified"
    no_changes_made = "no_changes_made"


STATUS_CODES: dict[OutcomeKind, int] = {
    OutcomeKind.ok: 200,
    OutcomeKind.tournament_not_found: 404,
    OutcomeKind.game_not_found_by_id: 404,
    OutcomeKind.game_not_found_by_title: 404,
    OutcomeKind.game_not_in_tournament: 404,
    OutcomeKind.already_exists: 409,
    OutcomeKind.max_limit_reached: 409,
    OutcomeKind.save_failed: 500,
    OutcomeKind.bad_request: 400,
    OutcomeKind.bad_patch_document: 400,
    OutcomeKind.unprocessable_content: 422,
    OutcomeKind.not_modified: 304,
    OutcomeKind.no_changes_made: 422,
}


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    kind: OutcomeKind
    message: str | None = None
    result: T | None = None
    errors: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=utcnow)

    @property
    def success(self) -> bool:
        return self.kind is OutcomeKind.ok

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def get_ok_result(self, expected_type: type[T]) -> T:
        """Return the payload of an OK outcome.

        ``expected_type`` is checked with ``isinstance``, so pass the origin
        type (``list``, not ``list[GameDto]``) for generic payloads.
        """
        if self.kind is not OutcomeKind.ok:
            raise UnexpectedOutcomeError(
                f"Expected an ok outcome carrying {expected_type.__name__}, but received {self.kind.value}."
            )
        if not isinstance(self.result, expected_type):
            raise UnexpectedOutcomeError(
                f"Expected an ok outcome carrying {expected_type.__name__}, "
                f"but it carries {type(self.result).__name__}."
            )
        return self.result

    def to_envelope(self) -> dict[str, Any]:
        """JSON envelope for endpoints that return the outcome itself."""
        envelope: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "statusCode": self.status_code,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.errors:
            envelope["errors"] = list(self.errors)
        return envelope

    # Constructors, one per outcome kind.

    @classmethod
    def ok(cls, result: Any = None, message: str | None = None) -> "ApiResponse":
        return cls(OutcomeKind.ok, message=message, result=result)

    @classmethod
    def tournament_not_found(cls, tournament_id: int) -> "ApiResponse":
        return cls(OutcomeKind.tournament_not_found, f"Tournament with id {tournament_id} not found.")

    @classmethod
    def game_not_found_by_id(cls, game_id: int) -> "ApiResponse":
        return cls(OutcomeKind.game_not_found_by_id, f"Game with id {game_id} was not found.")

    @classmethod
    def game_not_found_by_title(cls, title: str) -> "ApiResponse":
        return cls(OutcomeKind.game_not_found_by_title, f"Game with title {title} was not found.")

    @classmethod
    def game_not_in_tournament(cls, game_id: int, tournament_id: int) -> "ApiResponse":
        return cls(
            OutcomeKind.game_not_in_tournament,
            f"Game with ID {game_id} does not belong to Tournament ID {tournament_id}.",
        )

    @classmethod
    def already_exists(cls, message: str) -> "ApiResponse":
        return cls(OutcomeKind.already_exists, message)

    @classmethod
    def max_limit_reached(cls, tournament_id: int, limit: int) -> "ApiResponse":
        return cls(
            OutcomeKind.max_limit_reached,
            f"Tournament {tournament_id} already has the maximum of {limit} games.",
        )

    @classmethod
    def save_failed(cls, message: str = "No changes were saved.") -> "ApiResponse":
        return cls(OutcomeKind.save_failed, message)

    @classmethod
    def bad_request(cls, message: str) -> "ApiResponse":
        return cls(OutcomeKind.bad_request, message)

    @classmethod
    def bad_patch_document(cls, errors: list[str]) -> "ApiResponse":
        return cls(OutcomeKind.bad_patch_document, "The patch document is invalid.", errors=tuple(errors))

    @classmethod
    def unprocessable_content(cls, message: str, errors: list[str] | None = None) -> "ApiResponse":
        return cls(OutcomeKind.unprocessable_content, message, errors=tuple(errors or ()))

    @classmethod
    def not_modified(cls, message: str = "No changes were detected.") -> "ApiResponse":
        return cls(OutcomeKind.not_modified, message)

    @classmethod
    def no_changes_made(cls, message: str = "Update failed. No changes were saved.") -> "ApiResponse":
        return cls(OutcomeKind.no_changes_made, message)
