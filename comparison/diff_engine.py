"""Edit scripts at character, word and sentence granularity.

Diffs are computed from the LCS alignment RapidFuzz derives for the Indel
distance (insertions and deletions only), which works on plain strings as well
as on lists of hashable tokens. Between two unchanged runs every removal is
merged into one REMOVED segment followed by one ADDED segment, so a script
never holds two consecutive segments of the same kind.

Word tokens keep their trailing whitespace but are aligned on the word alone,
so ``"fox"`` at the end of one text matches ``"fox "`` in the other. The
whitespace that differs is emitted as REMOVED/ADDED text next to the word.

Round-trip: joining the EQUAL and ADDED values rebuilds the right input,
joining the EQUAL and REMOVED values rebuilds the left input.
"""
from __future__ import annotations

from itertools import chain
from typing import Callable, List, Literal, Optional, Sequence, Tuple, Union

from rapidfuzz.distance import Indel

from comparison.models import ChangeSummary, DiffKind, DiffScript, DiffSegment, SegmentValue
from comparison.tokenizer import split_word_tokens


Side = Literal["left", "right"]
TokenKey = Callable[[str], str]


def _join(parts: List[Sequence[str]], as_text: bool) -> SegmentValue:
    # Parts are string slices (char diff) or token list slices (word/sentence diff).
    if as_text:
        return "".join("".join(part) for part in parts)
    return tuple(chain.from_iterable(parts))


class _ScriptBuilder:
    """Collects diff parts, merging runs and ordering each hunk REMOVED then ADDED."""

    def __init__(self, as_text: bool):
        self.as_text = as_text
        self._segments: List[Tuple[DiffKind, List[Sequence[str]]]] = []
        self._removed: List[Sequence[str]] = []
        self._added: List[Sequence[str]] = []

    def equal(self, part: Sequence[str]) -> None:
        if not part:
            return
        self._flush()
        if self._segments and self._segments[-1][0] is DiffKind.EQUAL:
            self._segments[-1][1].append(part)
        else:
            self._segments.append((DiffKind.EQUAL, [part]))

    def remove(self, part: Sequence[str]) -> None:
        if part:
            self._removed.append(part)

    def add(self, part: Sequence[str]) -> None:
        if part:
            self._added.append(part)

    def _flush(self) -> None:
        if self._removed:
            self._segments.append((DiffKind.REMOVED, self._removed))
            self._removed = []
        if self._added:
            self._segments.append((DiffKind.ADDED, self._added))
            self._added = []

    def build(self) -> DiffScript:
        self._flush()
        return tuple(DiffSegment(kind, _join(parts, self.as_text)) for kind, parts in self._segments)


def diff_sequences(
    left: Union[str, Sequence[str]],
    right: Union[str, Sequence[str]],
    as_text: bool = True,
    key: Optional[TokenKey] = None,
) -> DiffScript:
    """
    Compute a minimal insert/delete script between two sequences.

    Args:
        left: Left-hand string or token list
        right: Right-hand string or token list
        as_text: Join segment values into strings (character/word diffs);
            when False values are tuples of tokens (sentence diffs)
        key: Optional function mapping a token to the prefix it is aligned
            on; the rest of a matched token is reported as REMOVED/ADDED
            when the two sides differ there

    Returns:
        Tuple of DiffSegment objects
    """
    if key is None:
        left_keys, right_keys = left, right
    else:
        left_keys = [key(token) for token in left]
        right_keys = [key(token) for token in right]

    builder = _ScriptBuilder(as_text)
    for op in Indel.opcodes(left_keys, right_keys):
        if op.tag == "equal":
            left_part = left[op.src_start:op.src_end]
            right_part = right[op.dest_start:op.dest_end]
            if key is None or left_part == right_part:
                builder.equal(left_part)
                continue
            for left_token, right_token in zip(left_part, right_part):
                common = key(left_token)
                builder.equal(common)
                builder.remove(left_token[len(common):])
                builder.add(right_token[len(common):])
            continue

        if op.tag in ("delete", "replace"):
            builder.remove(left[op.src_start:op.src_end])
        if op.tag in ("insert", "replace"):
            builder.add(right[op.dest_start:op.dest_end])

    return builder.build()


def diff_chars(left: str, right: str) -> DiffScript:
    """Character-level diff."""
    return diff_sequences(left or "", right or "", as_text=True)


def diff_words(left: str, right: str) -> DiffScript:
    """Word-level diff; whitespace travels with the word before it but is ignored when matching."""
    return diff_sequences(split_word_tokens(left), split_word_tokens(right), as_text=True, key=str.rstrip)


def diff_sentences(left: Sequence[str], right: Sequence[str]) -> DiffScript:
    """Sentence-level diff where each sentence is an opaque token."""
    return diff_sequences(list(left or ()), list(right or ()), as_text=False)


def apply_diff(script: DiffScript, side: Side) -> SegmentValue:
    """
    Rebuild one side of a diff.

    ``side="left"`` keeps EQUAL and REMOVED segments, ``side="right"`` keeps
    EQUAL and ADDED segments. Returns a string for text diffs and a tuple for
    sentence diffs.
    """
    skipped = DiffKind.ADDED if side == "left" else DiffKind.REMOVED
    kept = [segment.value for segment in script if segment.kind is not skipped]
    if any(isinstance(value, tuple) for value in kept):
        return tuple(chain.from_iterable(kept))
    return "".join(kept)  # type: ignore[arg-type]


def count_changes(script: DiffScript, significant_percent: float = 5.0) -> ChangeSummary:
    """
    Count whitespace-delimited tokens per segment kind.

    Must be given the full script; truncation belongs to reporting only.
    """
    added = removed = unchanged = 0
    added_chars = removed_chars = 0
    for segment in script:
        count = segment.token_count()
        if segment.kind is DiffKind.ADDED:
            added += count
            added_chars += segment.char_count()
        elif segment.kind is DiffKind.REMOVED:
            removed += count
            removed_chars += segment.char_count()
        else:
            unchanged += count

    total = added + removed + unchanged
    change_ratio = (added + removed) / total * 100 if total > 0 else 0.0

    return ChangeSummary(
        added=added,
        removed=removed,
        unchanged=unchanged,
        change_percentage=round(change_ratio),
        added_chars=added_chars,
        removed_chars=removed_chars,
        significant_changes=change_ratio > significant_percent,
    )


def truncate(script: DiffScript, limit: int) -> DiffScript:
    """First ``limit`` segments of a script, for reporting."""
    if limit < 0:
        raise ValueError("limit must be non-negative")
    return tuple(script[:limit])
