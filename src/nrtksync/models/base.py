"""Base model shared by feed and metadata types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class NrtkModel(BaseModel):
    """Base model with standard configuration.

    Feed models are immutable once parsed. Unknown keys are ignored and
    strings are kept byte-for-byte, since page bodies are written verbatim.
    A JSON ``null`` for an optional field reads as that field's default, so
    ``"logo_url": null`` parses the same as a missing ``logo_url``.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value
