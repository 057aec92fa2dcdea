"""Text helpers shared by the snapshot parser, differ and renderer."""

from __future__ import annotations

from typing import Iterable, List, Set, Union


def non_blank_lines(lines: Iterable[str]) -> List[str]:
    """Drop lines that are empty or contain only whitespace.

    Lines are returned untouched otherwise, so indentation survives.
    """
    return [line for line in lines if line.strip()]


def word_set(line: str) -> Set[str]:
    """Case-folded set of whitespace separated words."""
    return set(line.lower().split())


def title_case_field(name: str) -> str:
    """Turn a field identifier such as ``word_count`` into ``Word Count``."""
    return " ".join(part[:1].upper() + part[1:] for part in name.split("_"))


def format_number(value: Union[int, float]) -> str:
    """Render a number without a redundant trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
