"""Reconciliation of an imported dataset into the local identity store.

Two passes, athletes first so that swim times can resolve against the
merged identities:

1. Athlete pass: incoming athletes are matched to local ones by exact
   canonical name; their aliases are added unless another local athlete
   already owns the string, in which case an AliasConflict is reported and
   the local owner keeps it. Unmatched athletes are created. The same alias
   check applies to newly created athletes, so no name string ever resolves
   to two athletes.
2. Swim time pass: each record is validated on its own; a bad record is
   skipped with an error message and the batch continues. Records with a
   known id replace the local copy only when strictly newer.

Only a payload that is not shaped like a data file at all aborts the call,
and it does so before anything is changed.
"""

import json
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from swimtimes.identity.duplicates import DuplicateDetector
from swimtimes.identity.schemas import AliasConflict, ReconciliationResult
from swimtimes.identity.store import IdentityStore
from swimtimes.models.athlete import Athlete, AthleteMetadata
from swimtimes.models.swim_time import SwimTime

logger = structlog.get_logger()

RECORD_KEYS = ("time_entries", "swimTimes")


class MalformedPayloadError(ValueError):
    """Raised when an import payload is not a recognizable data file."""


class IncomingAthlete(BaseModel):
    """Athlete as it appears in an imported data file."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    canonical_name: str = Field(min_length=1)
    aliases: list[str] = Field(default_factory=list)
    metadata: AthleteMetadata | None = None


_incoming_athletes = TypeAdapter(list[IncomingAthlete])


def parse_payload(
    payload: str | bytes | Mapping[str, Any] | list[Any],
) -> tuple[list[IncomingAthlete], list[Any]]:
    """Split a data file into athletes and raw swim time entries.

    Accepts the exported object form (athletes + time_entries), an object
    with a swimTimes array, or a bare array of swim times.

    Raises:
        MalformedPayloadError: If the payload has none of these shapes
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            msg = f"Failed to parse JSON: {e}"
            raise MalformedPayloadError(msg) from e

    if isinstance(payload, list):
        return [], payload

    if not isinstance(payload, Mapping):
        msg = "Invalid data format: expected an object or an array"
        raise MalformedPayloadError(msg)

    try:
        athletes = _incoming_athletes.validate_python(payload.get("athletes") or [])
    except ValidationError as e:
        msg = f"Invalid athletes list: {e.error_count()} error(s)"
        raise MalformedPayloadError(msg) from e

    for key in RECORD_KEYS:
        records = payload.get(key)
        if isinstance(records, list):
            return athletes, records

    msg = "Invalid data format: expected time_entries or swimTimes array"
    raise MalformedPayloadError(msg)


def _describe_errors(error: ValidationError) -> str:
    fields = sorted(
        {".".join(str(p) for p in e["loc"]) or "entry" for e in error.errors()}
    )
    return ", ".join(fields)


class Reconciler:
    """Merges imported athletes and swim times into a local store."""

    def __init__(self, detector: DuplicateDetector | None = None):
        """Initialize reconciler.

        Args:
            detector: Duplicate detector run over the merged athletes
        """
        self._detector = detector or DuplicateDetector()

    def reconcile(
        self,
        store: IdentityStore,
        payload: str | bytes | Mapping[str, Any] | list[Any],
    ) -> ReconciliationResult:
        """Merge an imported data file into the store.

        Args:
            store: Local identity store (mutated in place)
            payload: Data file as JSON text or already-decoded JSON

        Returns:
            Counts, alias conflicts, duplicate suggestions and per-record errors

        Raises:
            MalformedPayloadError: If the payload shape is invalid; the store
                is left unchanged
        """
        incoming_athletes, incoming_records = parse_payload(payload)
        result = ReconciliationResult()

        with store.transaction():
            for incoming in incoming_athletes:
                self._reconcile_athlete(store, incoming, result)
            self._reconcile_swim_times(store, incoming_records, result)

        result.duplicate_suggestions = self._detector.find_duplicates(store)
        result.success = not result.conflicts

        logger.info(
            "import reconciled",
            imported=result.imported,
            updated=result.updated,
            skipped=result.skipped,
            athletes_imported=result.athletes_imported,
            conflicts=len(result.conflicts),
            duplicate_suggestions=len(result.duplicate_suggestions),
        )
        return result

    def _reconcile_athlete(
        self,
        store: IdentityStore,
        incoming: IncomingAthlete,
        result: ReconciliationResult,
    ) -> None:
        # An incoming canonical name that is a local alias folds into its owner
        local = store.owner_of(incoming.canonical_name)

        if local is not None:
            added = self._claim_aliases(store, local, incoming, result)
            if added:
                local.aliases.extend(added)
                local.touch()
            return

        accepted = self._claim_aliases(store, None, incoming, result)
        store.add_athlete(incoming.canonical_name, accepted, incoming.metadata)
        result.athletes_imported += 1

    def _claim_aliases(
        self,
        store: IdentityStore,
        local: Athlete | None,
        incoming: IncomingAthlete,
        result: ReconciliationResult,
    ) -> list[str]:
        """Aliases of incoming that local (or a new athlete) may take."""
        accepted: list[str] = []
        for alias in incoming.aliases:
            if alias == incoming.canonical_name or alias in accepted:
                continue
            if local is not None and local.owns(alias):
                continue

            owner = store.owner_of(alias)
            if owner is not None and owner is not local:
                result.conflicts.append(
                    AliasConflict(
                        alias=alias,
                        local_canonical=owner.canonical_name,
                        imported_canonical=incoming.canonical_name,
                    )
                )
                logger.warning(
                    "alias conflict",
                    alias=alias,
                    local_canonical=owner.canonical_name,
                    imported_canonical=incoming.canonical_name,
                )
                continue

            accepted.append(alias)
        return accepted

    def _reconcile_swim_times(
        self,
        store: IdentityStore,
        records: list[Any],
        result: ReconciliationResult,
    ) -> None:
        merged = {swim_time.id: swim_time for swim_time in store.swim_times}

        for raw in records:
            try:
                incoming = SwimTime.model_validate(raw)
            except ValidationError as e:
                result.errors.append(
                    f"Skipped invalid entry ({_describe_errors(e)}): "
                    f"{json.dumps(raw, default=str)}"
                )
                result.skipped += 1
                continue

            athlete = store.ensure_exists(store.resolve(incoming.athlete_name))
            incoming = incoming.model_copy(
                update={
                    "athlete_name": athlete.canonical_name,
                    "last_modified": incoming.effective_last_modified(),
                }
            )

            existing = merged.get(incoming.id)
            if existing is None:
                merged[incoming.id] = incoming
                result.imported += 1
            elif incoming.effective_last_modified() > existing.effective_last_modified():
                merged[incoming.id] = incoming
                result.updated += 1
            else:
                result.skipped += 1

        store.replace_swim_times(list(merged.values()))
