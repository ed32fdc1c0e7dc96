"""Shared pydantic base for API-facing models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys.

    Attributes stay snake_case in Python; ``to_api_dict`` produces the
    payload the website frontend consumes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
