import pytest
from pydantic import ValidationError

from vidtext_pipeline.comments.filtering import filter_by_language, filter_forest, filter_stats
from vidtext_pipeline.models import Comment, FilterOptions


def test_filter_forest_drops_spam_and_filters_replies(make_comment):
    good = make_comment(
        "Really helpful walkthrough",
        replies=[make_comment("Thanks, agreed"), make_comment("First!")],
    )
    spam = make_comment("check out my channel please")
    kept = filter_forest([good, spam])
    assert kept == [good]
    assert [r.text for r in kept[0].replies] == ["Thanks, agreed"]


def test_reply_judged_on_its_own_text(make_comment):
    # a kept reply under a dropped parent disappears with the parent
    parent = make_comment("First!", replies=[make_comment("Nice point about chapters")])
    assert filter_forest([parent]) == []


def test_bypass_returns_input_unchanged(make_comment):
    comments = [make_comment("First!"), make_comment("<b>spam</b>")]
    options = FilterOptions(enable_filtering=False)
    assert filter_forest(comments, options) is comments
    stats = filter_stats(comments, options)
    assert stats.filtered == 0
    assert stats.kept == 2
    assert stats.filter_rate == "0.0%"


def test_filter_stats_rate(make_comment):
    comments = [
        make_comment("First!"),
        make_comment("Loved the examples"),
        make_comment("Good pacing throughout"),
        make_comment("Clear and concise"),
    ]
    stats = filter_stats(comments)
    assert (stats.total, stats.filtered, stats.kept) == (4, 1, 3)
    assert stats.filter_rate == "25.0%"
    assert filter_stats([]).filter_rate == "0%"


def test_author_comments_survive_forest(make_comment):
    owner = make_comment("First!", author_channel_id="UCowner")
    assert filter_forest([owner], FilterOptions(), "UCowner") == [owner]


def test_filter_by_language(make_comment):
    ja = make_comment("とても良い動画です")
    en = make_comment("Very good video")
    ko = make_comment("좋은 영상이에요")
    comments = [ja, en, ko]
    assert filter_by_language(comments, "ja") == [ja]
    assert filter_by_language(comments, "ko") == [ko]
    assert filter_by_language(comments, "en") == [en]
    assert filter_by_language(comments, "ja-JP") == [ja]
    assert filter_by_language(comments, "xx") is comments
    assert filter_by_language(comments, None) is comments


def test_replies_are_one_level_deep():
    nested = Comment(id="r", text="reply", replies=[Comment(id="rr", text="deeper")])
    with pytest.raises(ValidationError):
        Comment(id="top", text="top", replies=[nested])


def test_comment_coerces_missing_fields():
    c = Comment.model_validate({"id": "x", "text": None, "likes": None})
    assert c.text == ""
    assert c.likes == 0
