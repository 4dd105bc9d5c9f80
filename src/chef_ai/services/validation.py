"""Schema validation of extracted model output."""

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from chef_ai.domain.errors import SchemaError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_json(json_text: str, model_type: type[ModelT]) -> ModelT:
    """Parse and validate JSON text against a model, raising ``SchemaError``."""
    try:
        return model_type.model_validate_json(json_text)
    except ValidationError as exc:
        details = describe_validation_error(exc)
        raise SchemaError(f"Invalid {model_type.__name__} response: {details}") from exc


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten validation errors into ``location: reason`` entries."""
    parts = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
