"""Name similarity scoring using RapidFuzz Levenshtein distance.

Score is one minus the edit distance of the normalized names divided by the
longer normalized length. Multi-word names get a bonus for a matching first
word and another for a matching last word ("Jon Smith" vs "John Smith").
"""

from rapidfuzz.distance import Levenshtein

from swimtimes.identity.normalizer import normalize

TOKEN_BONUS = 0.15


def similarity(a: str, b: str) -> float:
    """Score how alike two athlete names are.

    Symmetric in its arguments; identical names score 1.0.

    Args:
        a: First raw name
        b: Second raw name

    Returns:
        Similarity in [0.0, 1.0]
    """
    if a == b:
        return 1.0

    left = normalize(a)
    right = normalize(b)
    longest = max(len(left), len(right))
    if longest == 0:
        return 1.0

    # Unit cost insert/delete/substitute, no transpositions
    score = 1.0 - Levenshtein.distance(left, right) / longest

    left_tokens = left.split(" ")
    right_tokens = right.split(" ")
    if len(left_tokens) > 1 and len(right_tokens) > 1:
        if left_tokens[0] == right_tokens[0]:
            score = min(1.0, score + TOKEN_BONUS)
        if left_tokens[-1] == right_tokens[-1]:
            score = min(1.0, score + TOKEN_BONUS)

    return score
