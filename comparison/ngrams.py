"""N-gram extraction and common phrase detection."""
from __future__ import annotations

from typing import List, Optional, Sequence


def ngrams(tokens: Optional[Sequence[str]], n: int = 3) -> List[str]:
    """
    Space-joined n-grams of ``tokens``.

    Returns ``max(0, len(tokens) - n + 1)`` items, in order.

    Examples:
        >>> ngrams(["a", "b", "c", "d"], 3)
        ['a b c', 'b c d']
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    if not tokens or len(tokens) < n:
        return []
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def common_ngrams(
    left_tokens: Optional[Sequence[str]],
    right_tokens: Optional[Sequence[str]],
    n: int = 3,
    limit: Optional[int] = 10,
) -> List[str]:
    """
    N-grams of the left tokens that also occur in the right tokens.

    Deduplicated, in left-document order, truncated to ``limit`` (``None``
    keeps everything).
    """
    right = set(ngrams(right_tokens, n))
    if not right:
        return []

    common: List[str] = []
    seen = set()
    for phrase in ngrams(left_tokens, n):
        if phrase in right and phrase not in seen:
            seen.add(phrase)
            common.append(phrase)
            if limit is not None and len(common) >= limit:
                break
    return common
