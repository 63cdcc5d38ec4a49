"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity.

    Updates build a new instance through ``model_validate`` so field
    constraints are checked again.
    """

    model_config = ConfigDict(frozen=True)
