"""Shared base for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared by value. Also used for request option bundles."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
