import re
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import InputValidationError
from app.schemas.moderation import UUID_PATTERN

ModelT = TypeVar('ModelT', bound=BaseModel)

_UUID_RE = re.compile(UUID_PATTERN)


def is_valid_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))


_REQUEST_PARTS = ('body', 'query', 'path')


def describe_errors(errors: Sequence[Any]) -> str:
    if not errors:
        return 'Invalid request'
    first = errors[0]
    parts = [str(part) for part in first.get('loc', ())]
    if parts and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    location = '.'.join(parts) or 'body'
    return f"{location}: {first.get('msg', 'invalid value')}"


def validate_payload(model_cls: type[ModelT], payload: Any) -> ModelT:
    """Parse an untrusted request body; no store access happens here."""
    if isinstance(payload, model_cls):
        return payload
    if not isinstance(payload, dict):
        raise InputValidationError('Request body must be a JSON object')
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise InputValidationError(describe_errors(exc.errors())) from exc


def require_uuid(value: Any, field: str) -> str:
    if not is_valid_uuid(value):
        raise InputValidationError(f"Valid {field} is required")
    return value
