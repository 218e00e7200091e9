"""Grouping raw outline lines into spans, one per outline node."""

from collections.abc import Iterable, Sequence


def span_ranges(lines: Sequence[str], delim: str) -> list[tuple[int, int]]:
    """
    Compute ``(start, end)`` line ranges of the spans in ``lines``.

    A span starts at every line beginning with ``delim`` and runs until
    the next such line or the end of input. Lines before the first
    delimiter line form a leading span of their own when any of them is
    non-blank; a blank-only remainder is dropped.
    """
    starts = [i for i, line in enumerate(lines) if line.startswith(delim)]
    ranges: list[tuple[int, int]] = []

    first = starts[0] if starts else len(lines)
    if any(line.strip() for line in lines[:first]):
        ranges.append((0, first))

    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(lines)
        ranges.append((start, end))
    return ranges


def group_spans(
    lines: Iterable[str], delim: str, discard_empty: bool = False
) -> list[str]:
    """Split ``lines`` into newline-joined spans; see :func:`span_ranges`."""
    lines = list(lines)
    spans = ["\n".join(lines[start:end]) for start, end in span_ranges(lines, delim)]
    if discard_empty:
        spans = [s for s in spans if s.strip()]
    return spans
