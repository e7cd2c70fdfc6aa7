"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.build import build_site
from mdblog.core.collect import collect_posts
from mdblog.core.models import BuildReport, FileIssue
from mdblog.errors import SiteBuildError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _echo_issues(label: str, issues: list[FileIssue]) -> None:
    for issue in issues:
        typer.echo(f"  {label}: {issue.path} [{issue.kind}] {issue.message}")


def _echo_report(report: BuildReport, out_dir: Path) -> None:
    """Print per-file status lines and the closing summary."""
    for status, slug in report.succeeded:
        typer.echo(f"  {status}: {slug}")
    for path in report.skipped:
        typer.echo(f"  skipped: {path}")
    _echo_issues("warning", report.warnings)
    _echo_issues("failed", report.failed)
    counts = report.counts()
    typer.echo(
        f"Build complete ({out_dir}/) - "
        f"{len(report.succeeded)} succeeded "
        f"({counts['created']} created, {counts['updated']} updated, {counts['unchanged']} unchanged), "
        f"{counts['skipped']} skipped, "
        f"{counts['failed']} failed"
    )


def build_cmd(
    src: Annotated[Optional[str], typer.Option("--src", help="Directory of YYYY-MM-DD-slug.md posts")] = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Output directory")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict", help="Fail posts with an unknown layout")] = None,
    templates: Annotated[Optional[str], typer.Option("--templates-dir", help="Extra layout template directory")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log per-file progress")] = False,
    ):
    """Render every post to HTML and write an index page."""
    _setup_logging(verbose)
    settings = _settings(overrides={
        "src_dir": src, "output_dir": out, "strict": strict, "templates_dir": templates,
    })
    out_dir = Path(settings.output_dir)
    try:
        report = build_site(Path(settings.src_dir), out_dir, settings)
    except SiteBuildError as e:
        _fail(str(e))
    _echo_report(report, out_dir)


def list_cmd(
    src: Annotated[Optional[str], typer.Option("--src", help="Directory of YYYY-MM-DD-slug.md posts")] = None,
    ):
    """List collected posts, most recent first, with any per-file issues."""
    settings = _settings(overrides={"src_dir": src})
    src_dir = Path(settings.src_dir)
    if not src_dir.is_dir():
        _fail(f"Source directory not found: {src_dir}")

    collection = collect_posts(src_dir, settings.extensions, settings.post_separator)
    if not collection.posts:
        typer.echo("No posts found.")
    for post in collection.posts:
        typer.echo(f"{post.published.isoformat()}  {post.slug}  {post.title}")
    _echo_issues("warning", collection.warnings)
    _echo_issues("failed", collection.failed)
