from __future__ import annotations
import json
import os
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ..config import CommentsConfig, PipelineConfig
from ..models import Comment, FilterOptions, FilterStats
from ..utils.logging import setup_logging
from .filtering import filter_by_language, filter_forest, filter_stats
from .threads import comments_from_payload

logger = setup_logging(__name__)

CSV_COLUMNS = ["id", "parent_id", "author", "author_channel_id", "likes", "published_at", "text"]


def process_comments(
    comments: List[Comment],
    c: CommentsConfig,
    video_author_channel_id: Optional[str] = None,
    enable_filtering: Optional[bool] = None,
    lang: Optional[str] = None,
) -> Tuple[List[Comment], FilterStats]:
    """Language filter, then one classification pass over the whole collection."""
    options = FilterOptions(
        enable_filtering=c.enable_filtering if enable_filtering is None else enable_filtering,
        remove_spam=c.remove_spam,
        remove_noise=c.remove_noise,
        remove_unrelated=c.remove_unrelated,
    )
    comments = filter_by_language(comments, lang or c.language)
    stats = filter_stats(comments, options, video_author_channel_id, c.thresholds)
    kept = filter_forest(comments, options, video_author_channel_id, c.thresholds)
    logger.info(
        "Comments: kept %d of %d (%s filtered)",
        stats.kept, stats.total, stats.filter_rate,
    )
    return kept, stats


def _flat_rows(comments: List[Comment]) -> List[Dict[str, Any]]:
    rows = []
    for c in comments:
        rows.append(c.model_dump(include=set(CSV_COLUMNS)))
        for r in c.replies:
            row = r.model_dump(include=set(CSV_COLUMNS))
            row["parent_id"] = row.get("parent_id") or c.id
            rows.append(row)
    return rows


def run_comments_pipeline(
    cfg: PipelineConfig,
    payload_path: str,
    out_dir: str,
    video_author_channel_id: Optional[str] = None,
    enable_filtering: Optional[bool] = None,
    lang: Optional[str] = None,
) -> Dict[str, Any]:
    c = cfg.comments
    os.makedirs(out_dir, exist_ok=True)

    with open(payload_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    comments = comments_from_payload(data, max_replies=c.max_replies, max_pages=c.max_pages)
    logger.info("Loaded %d top-level comments from %s", len(comments), payload_path)

    kept, stats = process_comments(comments, c, video_author_channel_id, enable_filtering, lang)

    path_json = os.path.join(out_dir, "comments.json")
    with open(path_json, "w", encoding="utf-8") as f:
        json.dump(
            {
                "videoAuthorChannelId": video_author_channel_id,
                "language": lang or c.language or "all",
                "stats": stats.model_dump(by_alias=True),
                "comments": [k.model_dump(mode="json", by_alias=True) for k in kept],
            },
            f, ensure_ascii=False, indent=2,
        )

    path_csv = os.path.join(out_dir, "comments.csv")
    pd.DataFrame(_flat_rows(kept), columns=CSV_COLUMNS).to_csv(path_csv, index=False)

    return {
        "comments": path_json,
        "comments_table": path_csv,
        "stats": stats,
    }
