"""Strict base model for the field element types."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """An immutable pydantic model that rejects type coercion."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )
