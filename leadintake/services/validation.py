from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from leadintake.core.exceptions import ValidationError


def _reason(error: Dict[str, Any]) -> str:
    kind = error.get("type")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return "required"
    if kind == "string_too_short":
        return f"must be at least {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"must be at most {ctx.get('max_length')} characters"
    if kind == "string_type":
        # None comes through as a type error; for a form it means the field was left out
        return "required" if error.get("input") is None else "must be a string"
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "invalid")


def violations_from(exc: PydanticValidationError, schema: Type[BaseModel]) -> List[Tuple[str, str]]:
    """Flatten pydantic errors into (field, reason) pairs in field declaration order."""
    order = {name: index for index, name in enumerate(schema.model_fields)}
    found: List[Tuple[int, str, str]] = []
    seen = set()
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        field = str(loc[0])
        if field in seen:
            continue
        seen.add(field)
        found.append((order.get(field, len(order)), field, _reason(error)))
    found.sort(key=lambda item: item[0])
    return [(field, reason) for _, field, reason in found]


def validate_submission(schema: Type[BaseModel], raw: Any) -> Dict[str, Any]:
    """Validate and normalize ``raw`` against ``schema``.

    Returns the normalized field values or raises ``ValidationError`` listing
    every offending field. Nothing is returned on partial success.
    """
    if not isinstance(raw, dict):
        raise ValidationError([("body", "expected an object")])
    try:
        parsed = schema.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(violations_from(exc, schema))
    return parsed.model_dump()
