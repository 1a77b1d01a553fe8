"""Levenshtein edit distance and the similarity derived from it."""
from __future__ import annotations

from typing import Optional

from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str, max_distance: Optional[int] = None) -> int:
    """
    Unit-cost edit distance (insert, delete, substitute) over code points.

    RapidFuzz computes the distance with a bit-parallel algorithm in linear
    memory, so large pages never materialize the full DP matrix.

    Args:
        a: First string
        b: Second string
        max_distance: Optional bound; any distance above it is reported as
            ``max_distance + 1`` and the computation may stop early

    Returns:
        Number of edits needed to turn ``a`` into ``b``
    """
    a = a or ""
    b = b or ""
    if max_distance is not None and max_distance < 0:
        raise ValueError("max_distance must be non-negative")
    if max_distance is not None and abs(len(a) - len(b)) > max_distance:
        return max_distance + 1
    return Levenshtein.distance(a, b, score_cutoff=max_distance)


def levenshtein_ratio(a: str, b: str, distance: Optional[int] = None) -> float:
    """
    Unrounded Levenshtein similarity percentage.

    ``(max_len - distance) / max_len * 100``; two empty strings are 100%
    similar. A precomputed ``distance`` can be passed to avoid recomputing it.
    """
    max_len = max(len(a or ""), len(b or ""))
    if max_len == 0:
        return 100.0
    if distance is None:
        distance = levenshtein(a, b)
    return (max_len - distance) / max_len * 100


def levenshtein_similarity(a: str, b: str, distance: Optional[int] = None) -> int:
    """Levenshtein similarity as a rounded percentage."""
    return round(levenshtein_ratio(a, b, distance))
