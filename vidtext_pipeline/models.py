"""Typed records for transcripts and comment threads."""
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .transcript.captions import format_timestamp

# Spans at or below this length are caption artifacts, never segments.
MIN_SEGMENT_DURATION = 0.1


class _Record(BaseModel):
    # snake_case in Python, camelCase on the wire (model_dump(by_alias=True))
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SamplingMode(str, Enum):
    FULL = "full"
    SMART = "smart"
    SUMMARY = "summary"

    @classmethod
    def parse(cls, value: Union[str, "SamplingMode", None]) -> "SamplingMode":
        """Unknown or missing modes fall back to smart."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.SMART


class Segment(_Record):
    """One cleaned, deduplicated caption span."""
    text: str
    start: float = Field(ge=0)
    duration: float
    timestamp: str = ""

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("segment text is empty")
        return v

    @field_validator("duration")
    @classmethod
    def _duration_above_minimum(cls, v: float) -> float:
        if v <= MIN_SEGMENT_DURATION:
            raise ValueError(f"segment duration must exceed {MIN_SEGMENT_DURATION}s, got {v}")
        return v

    @model_validator(mode="after")
    def _fill_timestamp(self) -> "Segment":
        if not self.timestamp:
            self.timestamp = format_timestamp(self.start)
        return self

    @property
    def end(self) -> float:
        return self.start + self.duration


class TranscriptResult(_Record):
    segments: List[Segment] = Field(default_factory=list)
    is_truncated: bool = False
    total_segments: int = 0
    full_text: str = ""
    word_count: int = 0
    message: Optional[str] = None
    mode: SamplingMode = SamplingMode.FULL
    language: Optional[str] = None
    source: Optional[str] = None


class Comment(_Record):
    """A top-level comment or a reply. Replies never carry replies."""
    id: str = ""
    text: str = ""
    author: str = ""
    author_channel_id: Optional[str] = None
    likes: int = Field(default=0, ge=0)
    published_at: Optional[str] = None
    updated_at: Optional[str] = None
    reply_count: int = 0
    parent_id: Optional[str] = None
    replies: List[Comment] = Field(default_factory=list)

    @field_validator("text", "author", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("likes", "reply_count", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return 0 if v is None else v

    @model_validator(mode="after")
    def _replies_one_level(self) -> "Comment":
        for r in self.replies:
            if r.replies:
                raise ValueError(f"reply {r.id!r} carries nested replies; threads are one level deep")
        return self


class FilterOptions(_Record):
    # False bypasses every check regardless of the sub-flags
    enable_filtering: bool = True
    remove_spam: bool = True
    remove_noise: bool = True
    remove_unrelated: bool = True


class FilterStats(_Record):
    total: int = 0
    filtered: int = 0
    kept: int = 0
    filter_rate: str = "0%"
