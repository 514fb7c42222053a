"""Base entity class for all domain models."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate an opaque identifier."""
    return str(uuid4())


class WireModel(BaseModel):
    """Model serialized with the camelCase keys of the data file format.

    Python attributes stay snake_case; both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        from_attributes=True,
        extra="ignore",
    )


class BaseEntity(WireModel):
    """Base class for stored entities.

    Provides:
    - Opaque string ID (UUID by default, imported IDs kept as-is)
    - Created/updated timestamps
    """

    id: str = Field(default_factory=new_id, description="Unique entity identifier")
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When entity was created",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="When entity was last updated",
    )

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utc_now()
