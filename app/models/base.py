"""Shared pydantic base model and field normalisers.

API payloads use camelCase keys; storage rows use snake_case columns.
``CamelModel`` accepts both on input and emits camelCase when FastAPI
serialises a response.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases over snake_case fields."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value: Any) -> Any:
    """Map ``""`` and whitespace-only strings to ``None``."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
