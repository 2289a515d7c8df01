from __future__ import annotations
import json
import os
import typer
from rich import print, print_json
from .config_loader import load_config
from .utils.run_id import get_run_id
from .transcript.pipeline import run_transcript_pipeline
from .transcript.listing import language_codes, parse_subtitle_listing
from .comments.pipeline import run_comments_pipeline

app = typer.Typer(no_args_is_help=True)


def _require_file(path: str) -> None:
    if not os.path.isfile(path):
        print(f"[red]File not found: {path}[/red]")
        raise SystemExit(1)


@app.command()
def transcript(
    input_file: str = typer.Option(..., "--input", "-i", help="SRT or WebVTT caption file"),
    config: str = typer.Option(None, "--config", "-c"),
    mode: str = typer.Option(None, "--mode", "-m", help="full | smart | summary"),
    max_segments: int = typer.Option(None, "--max-segments", "-n"),
    fmt: str = typer.Option(None, "--format", "-f", help="srt | vtt (default: detect)"),
    out_dir: str = typer.Option(None, "--out-dir", "-o"),
    show_json: bool = typer.Option(False, "--json", help="Print the transcript record"),
):
    """Clean, deduplicate and sample a caption track."""
    _require_file(input_file)
    cfg = load_config(config)
    out_dir = out_dir or os.path.join(cfg.run.outputs_dir, get_run_id(), "transcript")
    out = run_transcript_pipeline(cfg, input_file, out_dir, mode=mode, max_segments=max_segments, fmt=fmt)
    with open(out["transcript"], "r", encoding="utf-8") as f:
        rec = json.load(f)
    if show_json:
        print_json(data=rec)
        return
    print(f"[green]Segments:[/green] {len(rec['segments'])} of {rec['totalSegments']} ({rec['wordCount']} words)")
    if rec["isTruncated"]:
        print(f"[yellow]{rec['message']}[/yellow]")
    for k, v in out.items():
        print(f" - {k}: {v}")


@app.command()
def comments(
    input_file: str = typer.Option(..., "--input", "-i", help="commentThreads JSON (one response or a list)"),
    config: str = typer.Option(None, "--config", "-c"),
    author_channel_id: str = typer.Option(None, "--author-channel-id", "-a", help="Uploader channel; never filtered"),
    no_filter: bool = typer.Option(False, "--no-filter"),
    lang: str = typer.Option(None, "--lang", help="Keep only comments in this script (ja, ko, zh, ar, ru, th, en)"),
    out_dir: str = typer.Option(None, "--out-dir", "-o"),
):
    """Filter spam, noise and bot chatter out of a comment collection."""
    _require_file(input_file)
    cfg = load_config(config)
    out_dir = out_dir or os.path.join(cfg.run.outputs_dir, get_run_id(), "comments")
    out = run_comments_pipeline(
        cfg, input_file, out_dir,
        video_author_channel_id=author_channel_id,
        enable_filtering=False if no_filter else None,
        lang=lang,
    )
    stats = out["stats"]
    print(f"[green]Kept {stats.kept} of {stats.total}[/green] ({stats.filter_rate} filtered)")
    for k in ("comments", "comments_table"):
        print(f" - {k}: {out[k]}")


@app.command()
def subs(
    input_file: str = typer.Option(..., "--input", "-i", help="Saved `yt-dlp --list-subs` output"),
):
    """List subtitle languages from saved yt-dlp output."""
    _require_file(input_file)
    with open(input_file, "r", encoding="utf-8") as f:
        stdout = f.read()
    listing = parse_subtitle_listing(stdout)
    print("[cyan]Subtitles[/cyan]")
    for s in listing.available:
        print(f"  {s['code']}: {s['name']}")
    print("[cyan]Automatic captions[/cyan]")
    for s in listing.auto_generated:
        print(f"  {s['code']}: {s['name']}")
    print(f"[green]Total languages: {listing.total_languages}[/green]")
    print(f"Codes: {', '.join(language_codes(stdout))}")


@app.command("config")
def show_config(
    config: str = typer.Option(None, "--config", "-c"),
):
    """Print the effective configuration (YAML + env overrides)."""
    cfg = load_config(config)
    print_json(data=cfg.model_dump())


if __name__ == "__main__":
    app()
