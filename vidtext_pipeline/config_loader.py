"""
Config loader with environment variable override support.

Env vars override YAML values so one configs/pipeline.yaml can serve both
local runs and batch jobs; change the env vars, not the file.

Override keys (all optional):
  VIDTEXT_OUTPUTS_DIR        e.g. /data/outputs
  VIDTEXT_SAMPLING_MODE      full | smart | summary
  VIDTEXT_MAX_SEGMENTS       e.g. 500
  VIDTEXT_FULL_TEXT_LIMIT    e.g. 20000
  VIDTEXT_COMMENT_FILTERING  1/0, true/false, on/off
"""
from __future__ import annotations

import os
from typing import Optional
import yaml
from .config import PipelineConfig

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(key: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    raise ValueError(f"{key} must be one of {sorted(_TRUTHY | _FALSY)}, got {value!r}")


def _parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {value!r}") from e


def _apply_env_overrides(raw: dict) -> dict:
    """Patch raw YAML dict with environment variable values where set."""

    def env(key: str, default=None):
        return os.environ.get(key, default)

    outputs_dir = env("VIDTEXT_OUTPUTS_DIR")
    if outputs_dir:
        raw.setdefault("run", {})["outputs_dir"] = outputs_dir

    mode = env("VIDTEXT_SAMPLING_MODE")
    if mode:
        raw.setdefault("transcript", {})["mode"] = mode

    max_segments = env("VIDTEXT_MAX_SEGMENTS")
    if max_segments:
        raw.setdefault("transcript", {})["max_segments"] = _parse_int("VIDTEXT_MAX_SEGMENTS", max_segments)

    limit = env("VIDTEXT_FULL_TEXT_LIMIT")
    if limit:
        raw.setdefault("transcript", {})["full_text_limit"] = _parse_int("VIDTEXT_FULL_TEXT_LIMIT", limit)

    filtering = env("VIDTEXT_COMMENT_FILTERING")
    if filtering:
        raw.setdefault("comments", {})["enable_filtering"] = _parse_bool("VIDTEXT_COMMENT_FILTERING", filtering)

    return raw


def load_config(path: Optional[str] = None) -> PipelineConfig:
    raw: dict = {}
    if path:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    raw = _apply_env_overrides(raw)
    return PipelineConfig.model_validate(raw)
