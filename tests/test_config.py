import pytest

from vidtext_pipeline.config_loader import load_config

ENV_KEYS = (
    "VIDTEXT_OUTPUTS_DIR",
    "VIDTEXT_SAMPLING_MODE",
    "VIDTEXT_MAX_SEGMENTS",
    "VIDTEXT_FULL_TEXT_LIMIT",
    "VIDTEXT_COMMENT_FILTERING",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.run.outputs_dir == "outputs"
    assert cfg.transcript.mode == "full"
    assert cfg.transcript.max_segments == 5000
    assert cfg.transcript.full_text_limit == 50000
    assert cfg.comments.enable_filtering is True
    assert cfg.comments.thresholds.repeat_token_ratio == 0.4


def test_yaml_file(tmp_path):
    p = tmp_path / "pipeline.yaml"
    p.write_text(
        "transcript:\n  mode: summary\n  max_segments: 300\n"
        "comments:\n  thresholds:\n    consonant_run: 10\n",
        encoding="utf-8",
    )
    cfg = load_config(str(p))
    assert cfg.transcript.mode == "summary"
    assert cfg.transcript.max_segments == 300
    assert cfg.comments.thresholds.consonant_run == 10
    assert cfg.comments.thresholds.url_count == 3


def test_empty_yaml_file(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(str(p)).transcript.max_segments == 5000


def test_env_overrides(tmp_path, monkeypatch):
    p = tmp_path / "pipeline.yaml"
    p.write_text("transcript:\n  mode: summary\n  max_segments: 300\n", encoding="utf-8")
    monkeypatch.setenv("VIDTEXT_SAMPLING_MODE", "smart")
    monkeypatch.setenv("VIDTEXT_MAX_SEGMENTS", "42")
    monkeypatch.setenv("VIDTEXT_FULL_TEXT_LIMIT", "1000")
    monkeypatch.setenv("VIDTEXT_OUTPUTS_DIR", "/data/out")
    monkeypatch.setenv("VIDTEXT_COMMENT_FILTERING", "off")
    cfg = load_config(str(p))
    assert cfg.transcript.mode == "smart"
    assert cfg.transcript.max_segments == 42
    assert cfg.transcript.full_text_limit == 1000
    assert cfg.run.outputs_dir == "/data/out"
    assert cfg.comments.enable_filtering is False


@pytest.mark.parametrize("key,value", [
    ("VIDTEXT_MAX_SEGMENTS", "lots"),
    ("VIDTEXT_COMMENT_FILTERING", "maybe"),
])
def test_bad_env_values_raise(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        load_config()
