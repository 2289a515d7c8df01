"""Fit a long transcript into a segment budget.

full    -> head truncation, exact chronology
smart   -> 20% intro, 30% evenly spaced middle samples, rest from the end
summary -> 10% intro, 70% from the end, remainder sampled from the middle
"""
from __future__ import annotations
import math
from typing import List, NamedTuple, Optional, Sequence, TypeVar, Union

from ..models import SamplingMode

T = TypeVar("T")

SMART_INTRO = 0.2
SMART_MIDDLE = 0.3
SUMMARY_INTRO = 0.1
SUMMARY_CONCLUSION = 0.7


class SampleResult(NamedTuple):
    segments: List
    is_truncated: bool
    message: Optional[str]


def _sample_full(segments: Sequence[T], budget: int) -> SampleResult:
    out = list(segments[:budget])
    return SampleResult(
        out, True,
        f"Transcript truncated to first {len(out)} of {len(segments)} segments",
    )


def _sample_smart(segments: Sequence[T], budget: int) -> SampleResult:
    n = len(segments)
    intro_n = math.floor(budget * SMART_INTRO)
    middle_n = math.floor(budget * SMART_MIDDLE)
    conclusion_n = budget - intro_n - middle_n

    intro = list(segments[:intro_n])
    conclusion_start = max(n - conclusion_n, intro_n)
    conclusion = list(segments[conclusion_start:])

    middle: List[T] = []
    if middle_n > 0 and conclusion_start > intro_n:
        span = conclusion_start - intro_n
        step = span / middle_n
        for i in range(middle_n):
            idx = math.floor(intro_n + i * step)
            if intro_n <= idx < conclusion_start:
                middle.append(segments[idx])

    return SampleResult(
        intro + middle + conclusion, True,
        f"Smart sampling: {len(intro)} intro + {len(middle)} middle samples + "
        f"{len(conclusion)} conclusion from {n} total segments",
    )


def _sample_summary(segments: Sequence[T], budget: int) -> SampleResult:
    n = len(segments)
    intro_n = math.floor(budget * SUMMARY_INTRO)
    conclusion_n = math.floor(budget * SUMMARY_CONCLUSION)
    middle_n = budget - intro_n - conclusion_n

    intro = list(segments[:intro_n])
    middle_end = n - conclusion_n

    middle: List[T] = []
    if middle_n > 0:
        stride = (n - conclusion_n) // middle_n
        for i in range(middle_n):
            idx = intro_n + i * stride
            if idx < middle_end:
                middle.append(segments[idx])

    # explicit start index: segments[-0:] would be the whole list
    conclusion = list(segments[middle_end:]) if conclusion_n > 0 else []

    return SampleResult(
        intro + middle + conclusion, True,
        f"Summary mode: {len(intro)} intro + {len(middle)} middle samples + "
        f"{len(conclusion)} conclusion from {n} total segments",
    )


def sample(
    segments: Sequence[T],
    mode: Union[str, SamplingMode] = SamplingMode.SMART,
    max_segments: int = 5000,
) -> SampleResult:
    """Select at most max_segments items, in original order.

    Returns everything untouched when the list already fits; otherwise
    is_truncated is True and message names the counts produced.
    """
    if len(segments) <= max_segments:
        return SampleResult(list(segments), False, None)

    budget = max(0, int(max_segments))
    mode = SamplingMode.parse(mode)
    if mode is SamplingMode.FULL:
        return _sample_full(segments, budget)
    if mode is SamplingMode.SUMMARY:
        return _sample_summary(segments, budget)
    return _sample_smart(segments, budget)
