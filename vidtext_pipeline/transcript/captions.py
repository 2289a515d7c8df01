"""Parse SRT and WebVTT caption tracks into raw timed cues.

Cue parsing is webvtt-py's. This module only evens out the block layout
it expects and turns its timestamps into seconds.
"""
from __future__ import annotations
import io
import os
import re
from typing import List, NamedTuple, Optional, Tuple

import webvtt
from webvtt.errors import MalformedCaptionError, MalformedFileError

from ..utils.logging import setup_logging

logger = setup_logging(__name__)

_TS_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})(?:[.,](\d{1,3}))?$")
_SRT_TIMING_RE = re.compile(r"\d{1,2}:\d{2}:\d{2},\d{1,3}\s*-->")


class RawCue(NamedTuple):
    text: str
    start: float
    end: float

    @property
    def duration(self) -> float:
        return max(0.0, self.end - self.start)


def ts_to_seconds(ts: str) -> Optional[float]:
    """'01:02:03.500' / '01:02:03,500' / '02:03.500' -> seconds, None when unparsable."""
    m = _TS_RE.match((ts or "").strip())
    if not m:
        return None
    h, mins, secs, frac = m.groups()
    total = int(h or 0) * 3600 + int(mins) * 60 + int(secs)
    if frac:
        total += float(f"0.{frac}")
    return float(total)


def format_timestamp(seconds: float) -> str:
    """Whole-second label: 'H:MM:SS' past the first hour, else 'M:SS'."""
    s = int(max(0.0, seconds))
    hours, rem = divmod(s, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _block_lines(content: str, fmt: str) -> List[str]:
    """Lines with a blank separator forced in front of every cue.

    webvtt-py splits cues on blank lines only, while real tracks drop them
    (SRT without separators, a NOTE running straight into a cue).
    """
    lines = [ln.rstrip() for ln in content.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n").split("\n")]
    while lines and not lines[0]:
        lines.pop(0)
    if fmt == "vtt" and lines and not lines[0].startswith("WEBVTT"):
        lines = ["WEBVTT", ""] + lines

    out: List[str] = []
    for i, line in enumerate(lines):
        if fmt == "srt":
            nxt = lines[i + 1] if i + 1 < len(lines) else ""
            starts_cue = line.strip().isdigit() and "-->" in nxt
        else:
            # a timing line right under a lone identifier stays with it
            starts_cue = "-->" in line and len(out) >= 2 and bool(out[-2])
        if starts_cue and out and out[-1]:
            out.append("")
        out.append(line)
    return out


def _parse(content: str, fmt: str) -> List[RawCue]:
    lines = _block_lines(content or "", fmt)
    if not any(lines):
        return []
    try:
        track = webvtt.from_buffer(io.StringIO("\n".join(lines)), format=fmt)
    except (MalformedFileError, MalformedCaptionError) as e:
        logger.warning("Unreadable %s caption track: %s", fmt, e)
        return []

    cues: List[RawCue] = []
    for cap in track:
        text = " ".join(ln.strip() for ln in cap.lines if ln.strip())
        if text:
            cues.append(RawCue(text, ts_to_seconds(cap.start), ts_to_seconds(cap.end)))
    logger.debug("Parsed %d %s cues", len(cues), fmt)
    return cues


def parse_srt(content: str) -> List[RawCue]:
    return _parse(content, "srt")


def parse_vtt(content: str) -> List[RawCue]:
    return _parse(content, "vtt")


def detect_format(content: str, filename: Optional[str] = None) -> str:
    if filename:
        ext = os.path.splitext(filename)[1].lower()
        if ext in (".vtt", ".srt"):
            return ext[1:]
    head = (content or "").lstrip("\ufeff").lstrip()
    if head.startswith("WEBVTT"):
        return "vtt"
    if _SRT_TIMING_RE.search(content or ""):
        return "srt"
    return "vtt"


def parse_captions(content: str, fmt: Optional[str] = None) -> List[RawCue]:
    fmt = (fmt or detect_format(content)).lower()
    if fmt == "srt":
        return parse_srt(content)
    return parse_vtt(content)


def read_caption_file(path: str) -> Tuple[str, str]:
    """Read a caption file and return (content, format)."""
    with open(path, "r", encoding="utf-8-sig") as f:
        content = f.read()
    return content, detect_format(content, filename=path)
