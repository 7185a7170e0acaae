"""Core base classes for domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Immutable domain model base with strict validation."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PayloadModel(BaseModel):
    """Lenient base for inbound request bodies.

    Unknown keys are ignored and every field is optional so callers can report
    exactly which required value is missing.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )
