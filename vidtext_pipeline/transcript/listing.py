"""Parse the subtitle table printed by `yt-dlp --list-subs`.

    [info] Available automatic captions for <id>:
    Language Name                 Formats
    en       English              vtt, ttml, srv3
    [info] Available subtitles for <id>:
    Language Name                 Formats
    ja       Japanese             vtt, ttml
"""
from __future__ import annotations
import re
from typing import Dict, List

from pydantic import BaseModel, Field

_CODE_RE = re.compile(r"^[a-z]{2,3}(?:-[A-Za-z0-9]+)*$")
_COLUMNS_RE = re.compile(r"\s{2,}")


class SubtitleListing(BaseModel):
    available: List[Dict[str, str]] = Field(default_factory=list)
    auto_generated: List[Dict[str, str]] = Field(default_factory=list)

    @property
    def total_languages(self) -> int:
        return len(self.available) + len(self.auto_generated)


def _entry(line: str) -> Dict[str, str] | None:
    cols = _COLUMNS_RE.split(line.strip())
    code = cols[0].split()[0] if cols and cols[0] else ""
    if not _CODE_RE.match(code):
        return None
    name = code
    if len(cols) >= 3:
        name = cols[1]
    elif len(cols) == 2 and "," not in cols[1]:
        name = cols[1]
    return {"code": code, "name": name}


def parse_subtitle_listing(stdout: str) -> SubtitleListing:
    listing = SubtitleListing()
    section = None
    for line in (stdout or "").splitlines():
        if "Available subtitles" in line:
            section = listing.available
            continue
        if "Available automatic captions" in line:
            section = listing.auto_generated
            continue
        if section is None or not line.strip():
            continue
        entry = _entry(line)
        if entry:
            section.append(entry)
    return listing


def language_codes(stdout: str) -> List[str]:
    """Distinct language codes in listing order, manual and automatic combined."""
    listing = parse_subtitle_listing(stdout)
    seen: List[str] = []
    for entry in listing.available + listing.auto_generated:
        if entry["code"] not in seen:
            seen.append(entry["code"])
    return seen
