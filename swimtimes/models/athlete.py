"""Athlete identity model."""

from pydantic import Field, field_validator

from swimtimes.models.base import BaseEntity, WireModel


class AthleteMetadata(WireModel):
    """Optional descriptive data attached to an athlete."""

    team: str | None = Field(default=None, description="Club or team")
    birth_year: int | None = Field(default=None, description="Year of birth")
    notes: str | None = Field(default=None, description="Free-form notes")


class Athlete(BaseEntity):
    """A single swimmer identity.

    The canonical name labels every swim time of the athlete. Aliases are
    alternate spellings known to refer to the same person. Across a store,
    no name string appears twice as a canonical name or alias.
    """

    canonical_name: str = Field(
        min_length=1,
        description="Name used on all swim times of this athlete",
    )
    aliases: list[str] = Field(
        default_factory=list,
        description="Alternate spellings that resolve to this athlete",
    )
    metadata: AthleteMetadata | None = Field(default=None)

    @field_validator("aliases")
    @classmethod
    def dedupe_aliases(cls, v: list[str]) -> list[str]:
        """Drop repeated aliases, keeping first occurrence order."""
        return list(dict.fromkeys(v))

    def owns(self, name: str) -> bool:
        """Check whether name is this athlete's canonical name or an alias."""
        return name == self.canonical_name or name in self.aliases
