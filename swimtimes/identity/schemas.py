"""Identity engine result schemas.

Duplicate candidates and alias conflicts are derived on demand and never
persisted.
"""

from pydantic import BaseModel, Field


class DuplicateCandidate(BaseModel):
    """Two athletes whose names are similar enough to be the same person."""

    athlete1: str = Field(description="Canonical name of the first athlete")
    athlete2: str = Field(description="Canonical name of the second athlete")
    similarity: float = Field(ge=0.0, le=1.0, description="Name similarity (0-1)")
    times_count1: int = Field(description="Swim times recorded for athlete1")
    times_count2: int = Field(description="Swim times recorded for athlete2")


class AliasConflict(BaseModel):
    """An alias claimed by a local athlete and by a different imported one.

    The local owner keeps the alias; a human decides whether to merge.
    """

    alias: str = Field(description="Contested alias")
    local_canonical: str = Field(description="Local athlete that owns the alias")
    imported_canonical: str = Field(description="Imported athlete that claimed it")


class ReconciliationResult(BaseModel):
    """Outcome of merging an imported dataset into the local one."""

    success: bool = Field(default=True, description="False if any conflicts")
    imported: int = Field(default=0, description="New swim times inserted")
    updated: int = Field(default=0, description="Local swim times replaced")
    skipped: int = Field(default=0, description="Swim times kept local or rejected")
    athletes_imported: int = Field(default=0, description="New athletes created")
    conflicts: list[AliasConflict] = Field(default_factory=list)
    duplicate_suggestions: list[DuplicateCandidate] = Field(default_factory=list)
    errors: list[str] = Field(
        default_factory=list, description="Per-record rejection messages"
    )
