"""Input converters: reshape a deserialized query result into a policy's typed input."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def model_input_converter(model: type[M]) -> Callable[[Any], M]:
    """Build a converter that validates raw input into `model`.

    JSON text (str or bytes) is parsed with model_validate_json, anything else
    goes through model_validate.

    Raises:
        TypeError: If `model` is not a pydantic model class.
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise TypeError(f"model must be a pydantic BaseModel subclass, got {model!r}")

    def convert(raw_input: Any) -> M:
        if isinstance(raw_input, (str, bytes, bytearray)):
            return model.model_validate_json(raw_input)
        return model.model_validate(raw_input)

    convert.__name__ = f"convert_{model.__name__}"
    convert.__qualname__ = convert.__name__
    return convert


def identity_converter(raw_input: Any) -> Any:
    """Pass raw input through unchanged, for policies that take the raw query result."""
    return raw_input
