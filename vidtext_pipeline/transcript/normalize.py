"""Clean a single caption span before it becomes a segment."""
from __future__ import annotations
import html
import re
from typing import Callable, Dict, Iterable, List, Tuple

NormalizeStep = Callable[[str], str]

_ENTITY_RE = re.compile(r"&(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d]")
_TIMING_TAG_RE = re.compile(r"<(?:\d{1,2}:)?\d{2}:\d{2}[.,]\d{3}>")
_MARKUP_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")
_SOUND_WORDS = r"(?:音楽|拍手|笑い|music|applause|laughter)"
_SOUND_MARKER_RE = re.compile(
    rf"[\[［]{_SOUND_WORDS}[\]］]|[(（]{_SOUND_WORDS}[)）]",
    re.IGNORECASE,
)
_MUSIC_NOTES_RE = re.compile(r"[♪♫♬♩]+")
_SPEAKER_TURN_RE = re.compile(r"^>>\s*")
_REPEAT_RE = re.compile(r"(.)\1{3,}", re.DOTALL)
_PUNCT_ONLY_RE = re.compile(r"^[。、，．・…,.!?！？\d\s]+$")
_WS_RE = re.compile(r"\s+")

HALFWIDTH_KATAKANA: Dict[str, str] = {
    "ｱ": "ア", "ｲ": "イ", "ｳ": "ウ", "ｴ": "エ", "ｵ": "オ",
    "ｶ": "カ", "ｷ": "キ", "ｸ": "ク", "ｹ": "ケ", "ｺ": "コ",
    "ｻ": "サ", "ｼ": "シ", "ｽ": "ス", "ｾ": "セ", "ｿ": "ソ",
    "ﾀ": "タ", "ﾁ": "チ", "ﾂ": "ツ", "ﾃ": "テ", "ﾄ": "ト",
    "ﾅ": "ナ", "ﾆ": "ニ", "ﾇ": "ヌ", "ﾈ": "ネ", "ﾉ": "ノ",
    "ﾊ": "ハ", "ﾋ": "ヒ", "ﾌ": "フ", "ﾍ": "ヘ", "ﾎ": "ホ",
    "ﾏ": "マ", "ﾐ": "ミ", "ﾑ": "ム", "ﾒ": "メ", "ﾓ": "モ",
    "ﾔ": "ヤ", "ﾕ": "ユ", "ﾖ": "ヨ",
    "ﾗ": "ラ", "ﾘ": "リ", "ﾙ": "ル", "ﾚ": "レ", "ﾛ": "ロ",
    "ﾜ": "ワ", "ｦ": "ヲ", "ﾝ": "ン",
    "ｧ": "ァ", "ｨ": "ィ", "ｩ": "ゥ", "ｪ": "ェ", "ｫ": "ォ",
    "ｬ": "ャ", "ｭ": "ュ", "ｮ": "ョ", "ｯ": "ッ",
    "ｰ": "ー", "ﾞ": "゛", "ﾟ": "゜",
}
_HALFWIDTH_TABLE = str.maketrans(HALFWIDTH_KATAKANA)


def fold_halfwidth_katakana(text: str) -> str:
    return text.translate(_HALFWIDTH_TABLE)


# Script-specific steps run after repeat collapsing, keyed by locale.
# Add a locale with register_locale_step instead of editing the pipeline.
LOCALE_STEPS: Dict[str, Tuple[NormalizeStep, ...]] = {
    "ja": (fold_halfwidth_katakana,),
}
DEFAULT_LOCALES: Tuple[str, ...] = ("ja",)


def register_locale_step(locale: str, step: NormalizeStep) -> None:
    LOCALE_STEPS[locale] = LOCALE_STEPS.get(locale, ()) + (step,)


def _locale_steps(locales: Iterable[str]) -> List[NormalizeStep]:
    steps: List[NormalizeStep] = []
    for loc in locales:
        steps.extend(LOCALE_STEPS.get(loc, ()))
    return steps


def _clean_once(text: str, steps: List[NormalizeStep]) -> str:
    # only complete "&name;" / "&#...;" references; "&notes" is plain text
    t = _ENTITY_RE.sub(lambda m: html.unescape(m.group(0)), text)
    t = _ZERO_WIDTH_RE.sub("", t)
    t = _TIMING_TAG_RE.sub("", t)
    t = _MARKUP_TAG_RE.sub("", t)
    t = _SOUND_MARKER_RE.sub("", t)
    t = _MUSIC_NOTES_RE.sub("", t)
    # ">> " marks a speaker change; named labels ("[John]", "JOHN:") are kept
    t = _SPEAKER_TURN_RE.sub("", t.lstrip())
    t = _REPEAT_RE.sub(r"\1", t)
    for step in steps:
        t = step(t)
    if _PUNCT_ONLY_RE.match(t):
        return ""
    return _WS_RE.sub(" ", t).strip()


def normalize(raw: str, locales: Iterable[str] = DEFAULT_LOCALES) -> str:
    """Return the clean form of one caption span ("" means: drop it).

    Steps, in order: decode entities (zero-width characters vanish), strip
    timing and markup tags, drop music/applause/laughter markers and note
    glyphs, drop a leading '>>' speaker-turn marker, collapse runs of four or
    more identical characters, apply locale steps (half-width katakana for
    'ja'), blank out punctuation/digit-only text, squeeze whitespace.

    The pass is repeated until the text stops changing, so
    normalize(normalize(x)) == normalize(x).
    """
    if not isinstance(raw, str):
        raise TypeError(f"normalize() expects str, got {type(raw).__name__}")
    steps = _locale_steps(locales)
    text = raw
    # every pass shortens the text or maps it through a fixed table, so this settles
    while True:
        cleaned = _clean_once(text, steps)
        if cleaned == text:
            return text
        text = cleaned
