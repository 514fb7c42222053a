"""Name normalization for similarity comparison.

Exact lookups in the identity store compare raw names; normalized forms are
only ever used for scoring similarity.
"""

import re

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]")


def normalize(name: str) -> str:
    """Lowercase, trim, collapse whitespace runs and strip punctuation.

    Args:
        name: Raw athlete name

    Returns:
        Normalized name (may be empty)
    """
    collapsed = _WHITESPACE.sub(" ", name.lower().strip())
    return _PUNCTUATION.sub("", collapsed)
