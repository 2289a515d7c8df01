"""Map comment-thread API payloads onto Comment records.

Fetching pages is the caller's job; this module only turns already-fetched
pages into one flat comment list that is filtered once.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field

from ..models import Comment
from ..utils.logging import setup_logging

logger = setup_logging(__name__)


class CommentPage(BaseModel):
    comments: List[Comment] = Field(default_factory=list)
    next_page_token: Optional[str] = None
    total_results: Optional[int] = None

    @property
    def has_more(self) -> bool:
        return bool(self.next_page_token)


def _author_channel_id(snippet: Mapping[str, Any]) -> Optional[str]:
    v = snippet.get("authorChannelId")
    if isinstance(v, Mapping):
        return v.get("value")
    return v


def _from_snippet(comment_id: str, snippet: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": comment_id,
        "text": snippet.get("textDisplay") or snippet.get("textOriginal") or "",
        "author": snippet.get("authorDisplayName") or "",
        "author_channel_id": _author_channel_id(snippet),
        "likes": snippet.get("likeCount") or 0,
        "published_at": snippet.get("publishedAt"),
        "updated_at": snippet.get("updatedAt"),
        "parent_id": snippet.get("parentId"),
    }


def comment_from_thread_item(item: Mapping[str, Any], max_replies: Optional[int] = None) -> Comment:
    """One commentThreads item -> top-level Comment with its (optionally capped) replies."""
    snippet = item.get("snippet") or {}
    top = (snippet.get("topLevelComment") or {}).get("snippet") or {}
    raw_replies = (item.get("replies") or {}).get("comments") or []
    if max_replies is not None:
        raw_replies = raw_replies[:max(0, max_replies)]
    replies = [
        Comment.model_validate(_from_snippet(r.get("id", ""), r.get("snippet") or {}))
        for r in raw_replies
    ]
    data = _from_snippet(item.get("id", ""), top)
    data["reply_count"] = snippet.get("totalReplyCount") or 0
    data["replies"] = replies
    return Comment.model_validate(data)


def page_from_response(payload: Mapping[str, Any], max_replies: Optional[int] = None) -> CommentPage:
    items = payload.get("items") or []
    return CommentPage(
        comments=[comment_from_thread_item(it, max_replies) for it in items],
        next_page_token=payload.get("nextPageToken"),
        total_results=(payload.get("pageInfo") or {}).get("totalResults"),
    )


def collect_pages(pages: Iterable[CommentPage], max_pages: int = 10) -> List[Comment]:
    """Flatten pages in order, stopping after max_pages."""
    out: List[Comment] = []
    count = 0
    for page in pages:
        count += 1
        out.extend(page.comments)
        if count >= max_pages:
            if page.has_more:
                logger.warning("Reached page limit (%d); %d comments collected so far", max_pages, len(out))
            break
    return out


def comments_from_payload(
    data: Any,
    max_replies: Optional[int] = None,
    max_pages: int = 10,
) -> List[Comment]:
    """Accept one API response, a list of responses, or a list of flat comment records."""
    if isinstance(data, Mapping):
        if "items" in data:
            return collect_pages([page_from_response(data, max_replies)], max_pages)
        if "comments" in data:
            return [Comment.model_validate(c) for c in data["comments"]]
        raise ValueError("comment payload must contain 'items' or 'comments'")
    if isinstance(data, list):
        if data and isinstance(data[0], Mapping) and "items" in data[0]:
            return collect_pages((page_from_response(p, max_replies) for p in data), max_pages)
        return [Comment.model_validate(c) for c in data]
    raise ValueError(f"unsupported comment payload type: {type(data).__name__}")
