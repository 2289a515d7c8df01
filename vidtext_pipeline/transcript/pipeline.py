from __future__ import annotations
import json
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from ..config import PipelineConfig
from ..models import SamplingMode, Segment, TranscriptResult
from ..utils.logging import setup_logging
from .captions import RawCue, parse_captions, read_caption_file
from .dedupe import collapse_segments
from .normalize import DEFAULT_LOCALES
from .sampling import sample

logger = setup_logging(__name__)


def _assemble(
    segments: List[Segment],
    mode: Union[str, SamplingMode],
    max_segments: int,
    full_text_limit: Optional[int],
    language: Optional[str],
    source: Optional[str],
) -> TranscriptResult:
    full_text = " ".join(s.text for s in segments)
    word_count = len(full_text.split())
    if full_text_limit and len(full_text) > full_text_limit:
        full_text = full_text[:full_text_limit] + "..."

    mode = SamplingMode.parse(mode)
    picked = sample(segments, mode, max_segments)
    if picked.is_truncated:
        logger.info(picked.message)
    return TranscriptResult(
        segments=picked.segments,
        is_truncated=picked.is_truncated,
        total_segments=len(segments),
        full_text=full_text,
        word_count=word_count,
        message=picked.message,
        mode=mode,
        language=language,
        source=source,
    )


def build_transcript(
    content: str,
    mode: Union[str, SamplingMode] = SamplingMode.FULL,
    max_segments: int = 5000,
    fmt: Optional[str] = None,
    full_text_limit: Optional[int] = 50000,
    language: Optional[str] = None,
    locales: Iterable[str] = DEFAULT_LOCALES,
) -> TranscriptResult:
    """Caption markup -> cues -> clean, deduplicated segments -> sampled result."""
    cues = parse_captions(content, fmt)
    segments = collapse_segments(cues, locales)
    logger.debug("Parsed %d cues into %d segments", len(cues), len(segments))
    return _assemble(segments, mode, max_segments, full_text_limit, language, source=fmt or "captions")


def build_transcript_from_items(
    items: Iterable[Mapping[str, Any]],
    mode: Union[str, SamplingMode] = SamplingMode.FULL,
    max_segments: int = 5000,
    full_text_limit: Optional[int] = 50000,
    language: Optional[str] = None,
    locales: Iterable[str] = DEFAULT_LOCALES,
) -> TranscriptResult:
    """Same pass for already-timed transcript items.

    Items carry `text` plus either `start`/`duration` in seconds or
    `offset`/`duration` in milliseconds (the transcript API shape).
    """
    cues: List[RawCue] = []
    for item in items:
        if "start" in item:
            start = float(item.get("start") or 0.0)
            duration = float(item.get("duration") or 0.0)
        else:
            start = float(item.get("offset") or 0.0) / 1000.0
            duration = float(item.get("duration") or 0.0) / 1000.0
        cues.append(RawCue(str(item.get("text") or ""), start, start + duration))
    segments = collapse_segments(cues, locales)
    return _assemble(segments, mode, max_segments, full_text_limit, language, source="transcript_api")


def run_transcript_pipeline(
    cfg: PipelineConfig,
    caption_path: str,
    out_dir: str,
    mode: Optional[str] = None,
    max_segments: Optional[int] = None,
    fmt: Optional[str] = None,
) -> Dict[str, str]:
    t = cfg.transcript
    os.makedirs(out_dir, exist_ok=True)

    content, detected = read_caption_file(caption_path)
    fmt = (fmt or detected).lower()
    logger.info("Caption file: %s (%s)", caption_path, fmt)
    result = build_transcript(
        content,
        mode=mode or t.mode,
        max_segments=t.max_segments if max_segments is None else max_segments,
        fmt=fmt,
        full_text_limit=t.full_text_limit,
        language=t.language,
        locales=t.locales,
    )
    logger.info(
        "Transcript: %d segments kept of %d (%s)",
        len(result.segments), result.total_segments, result.mode.value,
    )

    df_segments = pd.DataFrame(
        [s.model_dump() for s in result.segments],
        columns=["start", "duration", "timestamp", "text"],
    )
    path_segments = os.path.join(out_dir, "segments.csv")
    df_segments.to_csv(path_segments, index=False)

    path_transcript = os.path.join(out_dir, "transcript.json")
    with open(path_transcript, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(mode="json", by_alias=True), f, ensure_ascii=False, indent=2)

    return {
        "segments": path_segments,
        "transcript": path_transcript,
    }
