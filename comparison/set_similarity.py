"""Set-based word similarity."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Set, Union

from comparison.tokenizer import tokenize_words


@dataclass(frozen=True)
class SetOverlap:
    common: int
    unique_left: int
    unique_right: int


def build_word_set(source: Union[str, Iterable[str], None], min_length: int = 2) -> Set[str]:
    """
    Build a membership-only word set.

    Args:
        source: Raw text (tokenized with ``tokenize_words``) or pre-tokenized words
        min_length: Words must be strictly longer than this

    Returns:
        Set of distinct words longer than ``min_length``
    """
    if source is None:
        return set()
    tokens = tokenize_words(source) if isinstance(source, str) else source
    return {token for token in tokens if len(token) > min_length}


def jaccard(set_a: AbstractSet[str], set_b: AbstractSet[str]) -> float:
    """Jaccard similarity as a percentage in [0, 100]; 0 when both sets are empty."""
    union = len(set_a | set_b)
    if union == 0:
        return 0.0
    return len(set_a & set_b) / union * 100


def set_overlap(set_a: AbstractSet[str], set_b: AbstractSet[str]) -> SetOverlap:
    common = len(set_a & set_b)
    return SetOverlap(
        common=common,
        unique_left=len(set_a) - common,
        unique_right=len(set_b) - common,
    )
