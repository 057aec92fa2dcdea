"""Line level comparison of snapshot bodies.

Lines are compared verbatim first. A new line with no verbatim counterpart
is paired with the first still unmatched old line whose word overlap reaches
``SIMILARITY_THRESHOLD``; such pairs are reported as modifications rather
than as an unrelated addition and removal.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from mementor.models import ContentDiff, ModifiedLine
from mementor.utils.text import word_set

SIMILARITY_THRESHOLD = 0.7


def line_similarity(first: str, second: str) -> float:
    """Shared words divided by the size of the larger word set."""
    first_words = word_set(first)
    second_words = word_set(second)
    largest = max(len(first_words), len(second_words))
    if largest == 0:
        return 0.0
    return len(first_words & second_words) / largest


def find_similar_line(
    line: str, candidates: Iterable[str], *, threshold: float = SIMILARITY_THRESHOLD
) -> Optional[str]:
    """Return the first candidate at or above ``threshold``, if any."""
    for candidate in candidates:
        if line_similarity(line, candidate) >= threshold:
            return candidate
    return None


def diff_content(old_lines: Sequence[str], new_lines: Sequence[str]) -> ContentDiff:
    """Classify body lines as added, removed or modified."""
    old_set = set(old_lines)
    new_set = set(new_lines)

    # Old lines that may still be claimed as the prior revision of a new line.
    # Claims are tracked by position so repeated old lines are claimed one copy at a time.
    unmatched_old: List[str] = [line for line in old_lines if line not in new_set]
    consumed: set[int] = set()

    diff = ContentDiff()
    for line in new_lines:
        if line in old_set:
            continue
        for index, candidate in enumerate(unmatched_old):
            if index not in consumed and line_similarity(line, candidate) >= SIMILARITY_THRESHOLD:
                consumed.add(index)
                diff.modified.append(ModifiedLine(old=candidate, new=line))
                break
        else:
            diff.added.append(line)

    diff.removed = [line for index, line in enumerate(unmatched_old) if index not in consumed]
    return diff
