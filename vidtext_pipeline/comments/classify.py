"""Heuristic spam / noise / bot-chatter detection for viewer comments.

Nothing here is authoritative: false positives and negatives are expected.
Pattern tables are compiled once at import and never mutated; patterns that
depend on a threshold are compiled once per threshold value.
"""
from __future__ import annotations
import re
from collections import Counter
from functools import lru_cache
from typing import Optional

from ..config import CommentFilterConfig
from ..models import Comment, FilterOptions
from ..utils.logging import setup_logging

logger = setup_logging(__name__)

DEFAULT_THRESHOLDS = CommentFilterConfig()

SPAM_PATTERNS = (
    re.compile(r"\b(?:bit\.ly|tinyurl\.com|goo\.gl|short\.link|cutt\.ly|ow\.ly|tiny\.cc)\b", re.I),
    re.compile(r"(?:check\s*out|visit|click|watch|see)\s+(?:my|our)\s+(?:channel|profile|video|link)", re.I),
)
URL_RE = re.compile(r"https?://\S+", re.I)

HTML_NOISE_PATTERNS = (
    re.compile(r"<[^>]+>"),
    re.compile(r"&lt;|&gt;|&amp;|&quot;|&#\d+;"),
)

BOT_PATTERNS = (
    re.compile(r"who(?:'s| is)?\s+(?:watching|here|listening)\s+(?:in|from)?\s*\d{4}", re.I),
    re.compile(r"^(?:first|second|third|\d+(?:st|nd|rd|th))!?$", re.I),
    re.compile(r"^(?:anyone|who)\s+(?:else\s+)?(?:here|watching|listening)", re.I),
    re.compile(r"^(?:like|thumbs?\s*up)\s+if\s+you", re.I),
)

# Text mentioning any of these is treated as technical, never as keyboard mashing.
TECH_ALLOW_PATTERNS = (
    re.compile(r"github", re.I),
    re.compile(r"stackoverflow", re.I),
    re.compile(r"https?://", re.I),
    re.compile(r"error:|warning:|fatal:", re.I),
    re.compile(r"npm|yarn|pip|docker|git", re.I),
)
KEYBOARD_MASH_PATTERNS = (
    re.compile(r"^(?:asdf|qwer|zxcv|hjkl|yuio)+$", re.I),
    re.compile(r"^(?:abcd|efgh|ijkl|mnop|qrst|uvwx)+$", re.I),
    re.compile(r"^[0-9]+$"),
    re.compile(r"^[asdfghjkl]+$", re.I),
)
_GIBBERISH_STRIP_RE = re.compile(r"[\s.,!?;:'\"]")


# threshold-dependent patterns, compiled once per distinct threshold
@lru_cache(maxsize=None)
def _repeated_char_re(run: int) -> re.Pattern:
    return re.compile(rf"(.)\1{{{run - 1},}}", re.DOTALL)


@lru_cache(maxsize=None)
def _emoji_run_re(run: int) -> re.Pattern:
    return re.compile(rf"[\U0001F300-\U0001F9FF]{{{run},}}")


@lru_cache(maxsize=None)
def _consonant_run_re(run: int) -> re.Pattern:
    return re.compile(rf"[bcdfghjklmnpqrstvwxyz]{{{run},}}", re.I)


def is_repeated_text(text: str, cfg: CommentFilterConfig = DEFAULT_THRESHOLDS) -> bool:
    """One word making up too much of a comment ("buy buy buy buy now")."""
    words = (text or "").lower().split()
    if len(words) < cfg.repeat_token_min_tokens:
        return False
    counts = Counter(w for w in words if len(w) > cfg.repeat_token_min_len)
    limit = len(words) * cfg.repeat_token_ratio
    return any(c > limit for c in counts.values())


def is_gibberish(text: str, cfg: CommentFilterConfig = DEFAULT_THRESHOLDS) -> bool:
    clean = _GIBBERISH_STRIP_RE.sub("", text or "")
    if len(clean) < cfg.gibberish_min_len:
        return False
    if any(p.search(text) for p in TECH_ALLOW_PATTERNS):
        return False
    if any(p.match(clean) for p in KEYBOARD_MASH_PATTERNS):
        return True
    return bool(_consonant_run_re(cfg.consonant_run).search(clean))


def spam_reason(text: str, cfg: CommentFilterConfig = DEFAULT_THRESHOLDS) -> Optional[str]:
    for p in SPAM_PATTERNS:
        if p.search(text):
            return f"spam pattern {p.pattern!r}"
    if len(URL_RE.findall(text)) >= cfg.url_count:
        return "too many links"
    if is_repeated_text(text, cfg):
        return "repeated text"
    return None


def noise_reason(text: str, cfg: CommentFilterConfig = DEFAULT_THRESHOLDS) -> Optional[str]:
    for p in HTML_NOISE_PATTERNS:
        if p.search(text):
            return "html markup"
    if _repeated_char_re(cfg.repeated_char_run).search(text):
        return "repeated characters"
    if _emoji_run_re(cfg.emoji_run).search(text):
        return "emoji run"
    if not text.strip():
        return "empty text"
    if is_gibberish(text, cfg):
        return "gibberish"
    return None


def unrelated_reason(text: str) -> Optional[str]:
    t = text.strip()
    for p in BOT_PATTERNS:
        if p.search(t):
            return f"bot pattern {p.pattern!r}"
    return None


def is_spam(text: str, cfg: CommentFilterConfig = DEFAULT_THRESHOLDS) -> bool:
    return spam_reason(text, cfg) is not None


def is_noise(text: str, cfg: CommentFilterConfig = DEFAULT_THRESHOLDS) -> bool:
    return noise_reason(text, cfg) is not None


def is_unrelated(text: str) -> bool:
    return unrelated_reason(text) is not None


def filter_reason(
    comment: Comment,
    options: Optional[FilterOptions] = None,
    video_author_channel_id: Optional[str] = None,
    cfg: CommentFilterConfig = DEFAULT_THRESHOLDS,
) -> Optional[str]:
    """Why the comment should be dropped, or None to keep it.

    Checks run spam -> noise -> bot; the first match wins.
    """
    options = options or FilterOptions()
    if not options.enable_filtering:
        return None
    # the uploader's own comments are never filtered
    if video_author_channel_id and comment.author_channel_id == video_author_channel_id:
        return None

    text = comment.text or ""
    reason = None
    if options.remove_spam:
        reason = spam_reason(text, cfg)
    if reason is None and options.remove_noise:
        reason = noise_reason(text, cfg)
    if reason is None and options.remove_unrelated:
        reason = unrelated_reason(text)
    if reason:
        logger.debug("Filtered comment %s (%s): %s", comment.id, reason, text[:100])
    return reason


def should_filter(
    comment: Comment,
    options: Optional[FilterOptions] = None,
    video_author_channel_id: Optional[str] = None,
    cfg: CommentFilterConfig = DEFAULT_THRESHOLDS,
) -> bool:
    return filter_reason(comment, options, video_author_channel_id, cfg) is not None
