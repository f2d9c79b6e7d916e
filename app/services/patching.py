"""
JSON Patch (RFC 6902) parsing and application for update DTOs.

A patch is applied to the camelCase JSON form of a DTO, then the result is
validated back into the DTO type. Structural problems and paths that do not
exist are patch errors; a patched document that fails schema validation is a
validation error.
"""
import logging
from typing import Any, TypeVar

import jsonpatch
import jsonpointer
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PatchDocumentError(ValueError):
    """The patch document is malformed or cannot be applied."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class PatchValidationError(ValueError):
    """The patched document does not validate against the target schema."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def parse_patch_document(document: Any) -> jsonpatch.JsonPatch:
    """Validate the shape of every operation and build a ``JsonPatch``.

    Raises ``PatchDocumentError`` listing one message per bad operation.
    """
    if document is None:
        raise PatchDocumentError(["Patch document cannot be null."])
    if not isinstance(document, list):
        raise PatchDocumentError(["Patch document must be a JSON array of operations."])
    if not document:
        raise PatchDocumentError(["Patch document must contain at least one operation."])

    errors: list[str] = []
    for index, operation in enumerate(document):
        errors.extend(f"Operation {index}: {message}" for message in _operation_errors(operation))

    if errors:
        raise PatchDocumentError(errors)
    return jsonpatch.JsonPatch(document)


OPERATIONS = frozenset({"add", "remove", "replace", "move", "copy", "test"})


def _operation_errors(operation: Any) -> list[str]:
    if not isinstance(operation, dict):
        return ["expected an object."]

    op = operation.get("op")
    if not isinstance(op, str) or op not in OPERATIONS:
        return [f"unknown or missing 'op' {op!r}."]

    errors = []
    members = ("path", "from") if op in ("move", "copy") else ("path",)
    for member in members:
        pointer = operation.get(member)
        if not isinstance(pointer, str):
            errors.append(f"'{member}' must be a string.")
            continue
        try:
            jsonpointer.JsonPointer(pointer)
        except jsonpointer.JsonPointerException as exc:
            errors.append(f"invalid '{member}' {pointer!r}: {exc}")

    if op in ("add", "replace", "test") and "value" not in operation:
        errors.append(f"'{op}' requires a 'value' member.")
    return errors


def apply_patch(patch: jsonpatch.JsonPatch, target: ModelT) -> ModelT:
    """Apply ``patch`` to ``target`` and return a new, validated instance."""
    document = target.model_dump(mode="json", by_alias=True)
    allowed = set(document)

    try:
        patched = patch.apply(document)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as exc:
        raise PatchDocumentError([str(exc)]) from exc

    if not isinstance(patched, dict):
        raise PatchDocumentError(["Patch must not replace the whole document."])

    unknown = sorted(set(patched) - allowed)
    if unknown:
        raise PatchDocumentError([f"Path '/{key}' is not patchable." for key in unknown])

    try:
        return type(target).model_validate(patched)
    except ValidationError as exc:
        logger.debug("Patched document failed validation: %s", exc)
        raise PatchValidationError(format_validation_errors(exc)) from exc


def format_validation_errors(exc: ValidationError) -> list[str]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append(f"{location}: {error['msg']}")
    return errors
