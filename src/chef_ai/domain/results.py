"""Result values returned across the pipeline boundary."""

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


@dataclass(frozen=True)
class ApiSuccess(Generic[T]):
    """Successful pipeline call carrying its data."""

    data: T
    success: Literal[True] = True

    def to_dict(self) -> dict[str, object]:
        """Serialize to the ``{"success": true, "data": ...}`` wire shape."""
        return {"success": True, "data": _to_jsonable(self.data)}


@dataclass(frozen=True)
class ApiFailure:
    """Failed pipeline call carrying a human-readable error."""

    error: str
    success: Literal[False] = False

    def to_dict(self) -> dict[str, object]:
        """Serialize to the ``{"success": false, "error": ...}`` wire shape."""
        return {"success": False, "error": self.error}


ApiResult = ApiSuccess[T] | ApiFailure


def _to_jsonable(value: object) -> object:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list | tuple):
        return [_to_jsonable(item) for item in value]
    return value
