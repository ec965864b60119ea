"""Shared base for domain entities and read models."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen pydantic model.

    Entities never change in place: mutators return an updated copy and the
    caller decides whether to persist it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
