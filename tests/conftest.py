import pytest

from vidtext_pipeline.models import Comment, Segment


SRT_SAMPLE = """1
00:00:01,000 --> 00:00:03,000
Hello
world

2
00:00:04,000 --> 00:00:05,500
Second line
"""

VTT_SAMPLE = """WEBVTT
Kind: captions
Language: ja

NOTE
This is a note
spanning lines

STYLE
::cue { color: red }

intro
00:00:01.000 --> 00:00:02.500 align:start position:0%
<c>Hi</c> there

00:02.500 --> 00:04.000
Short form
"""

JA_PROGRESSIVE_SRT = """1
00:00:01,000 --> 00:00:03,000
こんにちは

2
00:00:03,500 --> 00:00:06,000
こんにちは世界
"""


@pytest.fixture
def srt_sample():
    return SRT_SAMPLE


@pytest.fixture
def vtt_sample():
    return VTT_SAMPLE


@pytest.fixture
def ja_progressive_srt():
    return JA_PROGRESSIVE_SRT


@pytest.fixture
def make_segments():
    def _make(n):
        return [Segment(text=f"line {i}", start=float(i), duration=1.0) for i in range(n)]
    return _make


@pytest.fixture
def make_comment():
    counter = {"n": 0}

    def _make(text, author_channel_id="UCviewer", replies=None, **kw):
        counter["n"] += 1
        return Comment(
            id=kw.pop("id", f"c{counter['n']}"),
            text=text,
            author=kw.pop("author", "viewer"),
            author_channel_id=author_channel_id,
            replies=replies or [],
            **kw,
        )
    return _make


@pytest.fixture
def thread_response():
    return {
        "nextPageToken": "NEXT",
        "pageInfo": {"totalResults": 2},
        "items": [
            {
                "id": "t1",
                "snippet": {
                    "totalReplyCount": 2,
                    "topLevelComment": {
                        "id": "t1",
                        "snippet": {
                            "textDisplay": "Great explanation of the sampling modes",
                            "authorDisplayName": "alice",
                            "authorChannelId": {"value": "UCalice"},
                            "likeCount": 12,
                            "publishedAt": "2024-05-01T10:00:00Z",
                            "updatedAt": "2024-05-01T10:00:00Z",
                        },
                    },
                },
                "replies": {
                    "comments": [
                        {
                            "id": "t1.r1",
                            "snippet": {
                                "textOriginal": "Agreed, very clear",
                                "authorDisplayName": "bob",
                                "authorChannelId": {"value": "UCbob"},
                                "publishedAt": "2024-05-01T11:00:00Z",
                                "parentId": "t1",
                            },
                        },
                        {
                            "id": "t1.r2",
                            "snippet": {
                                "textDisplay": "First!",
                                "authorDisplayName": "carol",
                                "authorChannelId": {"value": "UCcarol"},
                                "likeCount": 0,
                                "publishedAt": "2024-05-01T12:00:00Z",
                                "parentId": "t1",
                            },
                        },
                    ]
                },
            },
            {
                "id": "t2",
                "snippet": {
                    "totalReplyCount": 0,
                    "topLevelComment": {
                        "id": "t2",
                        "snippet": {
                            "textDisplay": "check out my channel for free stuff",
                            "authorDisplayName": "spammer",
                            "authorChannelId": {"value": "UCspam"},
                            "likeCount": 1,
                            "publishedAt": "2024-05-02T10:00:00Z",
                        },
                    },
                },
            },
        ],
    }
