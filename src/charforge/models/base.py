"""Base model shared by all charforge schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CharforgeModel(BaseModel):
    """Base class for charforge data models.

    Python attributes are snake_case; the JSON boundary uses camelCase.
    Both spellings are accepted on input, and ``model_dump(by_alias=True)``
    produces the boundary shape.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )


__all__ = ["CharforgeModel"]
