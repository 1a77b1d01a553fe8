"""Sentence and word tokenization for document comparison."""
from __future__ import annotations

import re
from typing import List, Optional

_SENTENCE_BOUNDARY_RE = re.compile(r"[.!?]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
# A leading whitespace run, or a word followed by its trailing whitespace.
_DIFF_TOKEN_RE = re.compile(r"^\s+|\S+\s*")


def tokenize_sentences(text: Optional[str]) -> List[str]:
    """
    Split text into sentences on runs of ``.``, ``!`` and ``?``.

    Examples:
        >>> tokenize_sentences("One. Two!! Three?")
        ['One', 'Two', 'Three']
    """
    if not text:
        return []
    parts = (part.strip() for part in _SENTENCE_BOUNDARY_RE.split(text))
    return [part for part in parts if part]


def tokenize_words(text: Optional[str]) -> List[str]:
    """
    Lowercase ``text`` and split it into word tokens.

    Every character that is neither a word character nor whitespace acts as
    a separator.

    Examples:
        >>> tokenize_words("Don't panic, Arthur!")
        ['don', 't', 'panic', 'arthur']
    """
    if not text:
        return []
    return _NON_WORD_RE.sub(" ", text.lower()).split()


def split_word_tokens(text: Optional[str]) -> List[str]:
    """
    Split text into diffable word tokens that keep their trailing whitespace.

    ``"".join(split_word_tokens(text)) == text`` always holds.

    Examples:
        >>> split_word_tokens("the quick  fox")
        ['the ', 'quick  ', 'fox']
    """
    if not text:
        return []
    return _DIFF_TOKEN_RE.findall(text)
