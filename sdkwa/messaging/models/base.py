"""
Shared base for request and response schemas.

Python attributes are snake_case; the wire format is camelCase.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from sdkwa.core.errors import SDKWADecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


class SDKWAModel(BaseModel):
    """Base schema with camelCase wire aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SDKWAResponse(SDKWAModel):
    """Base response schema; unknown fields sent by the provider are kept."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


def parse_response(model: type[ModelT], data: Any) -> ModelT:
    """Validate a decoded JSON body against ``model``.

    Raises:
        SDKWADecodeError: If the body does not match the expected shape
    """
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as e:
        raise SDKWADecodeError(
            f"Unexpected {model.__name__} response: {e}", body=data
        ) from e


def parse_object(data: Any) -> dict[str, Any]:
    """Require a JSON object body."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SDKWADecodeError(
            f"Expected a JSON object, got {type(data).__name__}", body=data
        )
    return data


def parse_object_list(data: Any) -> list[dict[str, Any]]:
    """Require a JSON array of objects."""
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise SDKWADecodeError("Expected a JSON array of objects", body=data)
    return data
