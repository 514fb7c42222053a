"""Duplicate athlete detection.

Scores every pair of canonical names with the name similarity function and
reports pairs above a threshold. The pairwise scan is O(n^2) in the number
of athletes, which is fine for a single roster.
"""

from collections import Counter
from itertools import combinations

import structlog

from swimtimes.identity.schemas import DuplicateCandidate
from swimtimes.identity.similarity import similarity
from swimtimes.identity.store import IdentityStore

logger = structlog.get_logger()


class DuplicateDetector:
    """Finds athletes whose names suggest they are the same person."""

    def __init__(self, threshold: float = 0.85):
        """Initialize duplicate detector.

        Args:
            threshold: Minimum similarity score (0.0-1.0) to report a pair
        """
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def find_duplicates(
        self,
        store: IdentityStore,
        threshold: float | None = None,
    ) -> list[DuplicateCandidate]:
        """Find candidate duplicate pairs among all athletes.

        Args:
            store: Identity store to scan
            threshold: Override for the configured threshold

        Returns:
            Candidates sorted by similarity, highest first
        """
        cutoff = self._threshold if threshold is None else threshold
        names = [athlete.canonical_name for athlete in store.athletes]
        counts = Counter(swim_time.athlete_name for swim_time in store.swim_times)

        candidates = []
        for name1, name2 in combinations(names, 2):
            if name1 == name2:
                continue
            score = similarity(name1, name2)
            if score >= cutoff:
                candidates.append(
                    DuplicateCandidate(
                        athlete1=name1,
                        athlete2=name2,
                        similarity=score,
                        times_count1=counts[name1],
                        times_count2=counts[name2],
                    )
                )

        candidates.sort(key=lambda c: c.similarity, reverse=True)
        logger.debug(
            "duplicate scan complete",
            athletes=len(names),
            candidates=len(candidates),
            threshold=cutoff,
        )
        return candidates
