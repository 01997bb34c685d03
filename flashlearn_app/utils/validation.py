# File: flashlearn_app/utils/validation.py
# Turns request payloads into pydantic models, raising the app's ValidationError.

from typing import Any, Dict, List, Optional, Type, TypeVar

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.error_handlers import ValidationError

SchemaT = TypeVar('SchemaT', bound=BaseModel)


def format_pydantic_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors into ``[{field, message}]``."""
    errors = []
    for err in exc.errors():
        field = '.'.join(str(part) for part in err.get('loc', ())) or 'body'
        message = err.get('msg', 'Invalid value')
        # Strip pydantic's "Value error, " prefix from custom validator messages
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        errors.append({'field': field, 'message': message})
    return errors


def parse_payload(schema: Type[SchemaT], data: Optional[Any] = None) -> SchemaT:
    """Validate ``data`` (defaults to the JSON body) against ``schema``."""
    if data is None:
        data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError(errors=[{'field': 'body', 'message': 'Request body must be a JSON object'}])
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(errors=format_pydantic_errors(exc)) from exc
