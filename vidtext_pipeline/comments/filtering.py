from __future__ import annotations
import re
from typing import List, Optional

from ..config import CommentFilterConfig
from ..models import Comment, FilterOptions, FilterStats
from .classify import DEFAULT_THRESHOLDS, should_filter

# Script detection for the optional language filter.
LANGUAGE_PATTERNS = {
    "ja": re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]"),
    "ko": re.compile(r"[\uAC00-\uD7AF]"),
    "zh": re.compile(r"[\u4E00-\u9FFF]"),
    "ar": re.compile(r"[\u0600-\u06FF]"),
    "ru": re.compile(r"[\u0400-\u04FF]"),
    "th": re.compile(r"[\u0E00-\u0E7F]"),
    # mostly ASCII: Latin text plus typographic punctuation and emoji
    "en": re.compile(r"^[\x00-\x7F\u00A0-\u00FF\u2000-\u206F\U0001F300-\U0001FAFF\s]+$"),
}


def filter_forest(
    comments: List[Comment],
    options: Optional[FilterOptions] = None,
    video_author_channel_id: Optional[str] = None,
    cfg: CommentFilterConfig = DEFAULT_THRESHOLDS,
) -> List[Comment]:
    """Drop filtered top-level comments; re-filter replies of the kept ones in place.

    A reply is judged on its own text, never on its parent's verdict.
    With filtering disabled the input list itself is returned.
    """
    options = options or FilterOptions()
    if not options.enable_filtering:
        return comments

    kept: List[Comment] = []
    for c in comments:
        if should_filter(c, options, video_author_channel_id, cfg):
            continue
        if c.replies:
            c.replies = [
                r for r in c.replies
                if not should_filter(r, options, video_author_channel_id, cfg)
            ]
        kept.append(c)
    return kept


def filter_stats(
    comments: List[Comment],
    options: Optional[FilterOptions] = None,
    video_author_channel_id: Optional[str] = None,
    cfg: CommentFilterConfig = DEFAULT_THRESHOLDS,
) -> FilterStats:
    """Counts over the top-level comments only."""
    total = len(comments)
    filtered = sum(1 for c in comments if should_filter(c, options, video_author_channel_id, cfg))
    rate = f"{filtered / total * 100:.1f}" if total else "0"
    return FilterStats(total=total, filtered=filtered, kept=total - filtered, filter_rate=f"{rate}%")


def filter_by_language(comments: List[Comment], lang: Optional[str]) -> List[Comment]:
    """Keep top-level comments written in the given script; unknown codes keep everything."""
    if not lang:
        return comments
    pattern = LANGUAGE_PATTERNS.get(lang.split("-")[0].lower())
    if pattern is None:
        return comments
    return [c for c in comments if pattern.search(c.text or "")]
