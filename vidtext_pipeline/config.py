from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

class RunConfig(BaseModel):
    outputs_dir: str = "outputs"

class TranscriptConfig(BaseModel):
    mode: str = "full"  # full | smart | summary
    max_segments: int = 5000
    # fullText is capped for transport; wordCount is always computed on the uncapped text
    full_text_limit: int = 50000
    language: Optional[str] = None
    # Locale-specific normalization steps (see transcript/normalize.py LOCALE_STEPS)
    locales: List[str] = Field(default_factory=lambda: ["ja"])

class CommentFilterConfig(BaseModel):
    """Heuristic thresholds for the comment classifier.

    These were tuned by hand against real comment sections and may need
    per-language revisiting, so they live in config instead of the classifier.
    """
    repeat_token_ratio: float = 0.4
    repeat_token_min_tokens: int = 5
    # only tokens strictly longer than this count towards repetition
    repeat_token_min_len: int = 2
    url_count: int = 3
    repeated_char_run: int = 6
    emoji_run: int = 5
    gibberish_min_len: int = 8
    consonant_run: int = 8

class CommentsConfig(BaseModel):
    enable_filtering: bool = True
    remove_spam: bool = True
    remove_noise: bool = True
    remove_unrelated: bool = True
    language: Optional[str] = None
    max_replies: Optional[int] = None
    max_pages: int = 10
    thresholds: CommentFilterConfig = Field(default_factory=CommentFilterConfig)

class PipelineConfig(BaseModel):
    run: RunConfig = Field(default_factory=RunConfig)
    transcript: TranscriptConfig = Field(default_factory=TranscriptConfig)
    comments: CommentsConfig = Field(default_factory=CommentsConfig)
