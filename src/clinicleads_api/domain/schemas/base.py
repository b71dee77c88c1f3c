from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_CONFIG = ConfigDict(
    frozen=True,
    from_attributes=True,
    populate_by_name=True,
    extra="ignore",
)


class BaseSchema(BaseModel):
    """Base schema with shared configuration."""

    model_config = SCHEMA_CONFIG


class TimestampedSchema(BaseSchema):
    """Mixin schema providing timestamp fields.

    ``updated_at`` is optional because legacy landing page rows were written without it.
    """

    created_at: datetime = Field(..., description="Creation timestamp in UTC.")
    updated_at: datetime | None = Field(None, description="Last update timestamp in UTC.")


__all__ = ["BaseSchema", "TimestampedSchema"]
