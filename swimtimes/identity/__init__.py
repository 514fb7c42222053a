"""Athlete identity resolution and reconciliation.

This module provides:
- normalize / similarity: Name comparison (Levenshtein via RapidFuzz)
- IdentityStore: Canonical names, aliases, merge/rename/unmerge
- DuplicateDetector: Pairwise scan for likely duplicate athletes
- Reconciler: Merging an imported data file into the local store
"""

from swimtimes.identity.duplicates import DuplicateDetector
from swimtimes.identity.normalizer import normalize
from swimtimes.identity.reconciliation import MalformedPayloadError, Reconciler
from swimtimes.identity.schemas import (
    AliasConflict,
    DuplicateCandidate,
    ReconciliationResult,
)
from swimtimes.identity.similarity import similarity
from swimtimes.identity.store import AthleteNotFoundError, IdentityError, IdentityStore

__all__ = [
    "AliasConflict",
    "AthleteNotFoundError",
    "DuplicateCandidate",
    "DuplicateDetector",
    "IdentityError",
    "IdentityStore",
    "MalformedPayloadError",
    "ReconciliationResult",
    "Reconciler",
    "normalize",
    "similarity",
]
