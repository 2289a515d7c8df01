"""Collapse the staircase duplication of live / auto-generated captions.

Auto captions re-emit the previous line plus a few new words on every cue:
"hello" -> "hello world" -> "hello world today". Only the immediately
preceding accepted segment is compared, so a word legitimately repeated
later in the video survives.
"""
from __future__ import annotations
from typing import Iterable, List

from ..models import MIN_SEGMENT_DURATION, Segment
from ..utils.logging import setup_logging
from .captions import RawCue
from .normalize import DEFAULT_LOCALES, normalize

logger = setup_logging(__name__)

ACCEPTED = "accepted"
REPLACED = "replaced"
DROPPED = "dropped"


def is_progressive_extension(prev: str, text: str) -> bool:
    """True when text is prev plus a continuation.

    Spaced scripts need a word boundary ("hello" -> "hello world"); when prev
    ends in a non-ASCII character (Japanese, Chinese...) any continuation counts.
    """
    if not prev or len(text) <= len(prev) or not text.startswith(prev):
        return False
    if text[len(prev)] == " ":
        return True
    return not prev[-1].isascii()


class DuplicateCollapser:
    """Sequential filter; state is the text of the last accepted segment."""

    def __init__(self) -> None:
        self.segments: List[Segment] = []
        self.last_text = ""

    def offer(self, text: str, start: float, end: float) -> str:
        duration = max(0.0, end - start)
        if not text or duration <= MIN_SEGMENT_DURATION:
            return DROPPED
        if text == self.last_text:
            return DROPPED
        seg = Segment(text=text, start=start, duration=duration)
        if self.segments and is_progressive_extension(self.last_text, text):
            # the shorter, earlier cue is the artifact; the extension replaces it
            self.segments[-1] = seg
            self.last_text = text
            return REPLACED
        self.segments.append(seg)
        self.last_text = text
        return ACCEPTED


def collapse_segments(cues: Iterable[RawCue], locales: Iterable[str] = DEFAULT_LOCALES) -> List[Segment]:
    """Normalize each cue and collapse duplicates into an ordered segment list."""
    locales = tuple(locales)
    collapser = DuplicateCollapser()
    counts = {ACCEPTED: 0, REPLACED: 0, DROPPED: 0}
    for cue in cues:
        action = collapser.offer(normalize(cue.text, locales), cue.start, cue.end)
        counts[action] += 1
    logger.debug(
        "Collapsed cues: %d accepted, %d superseded, %d dropped -> %d segments",
        counts[ACCEPTED], counts[REPLACED], counts[DROPPED], len(collapser.segments),
    )
    return collapser.segments
