"""Site build orchestration: collect -> render -> write"""

import json
import logging
from pathlib import Path

from jinja2 import TemplateError

from mdblog.config import Settings
from mdblog.core.collect import collect_posts
from mdblog.core.models import BuildReport, FileIssue
from mdblog.core.render import Renderer
from mdblog.core.utils.hashing import file_sha256, sha256
from mdblog.errors import SiteBuildError, UnknownLayoutError


logger = logging.getLogger(__name__)

INDEX_HTML = "index.html"
INDEX_JSON = "index.json"


def write_output(path: Path, content: str) -> str:
    """Write content to path unless identical. Returns created, updated, or unchanged."""
    previous = file_sha256(path)
    if previous == sha256(content):
        return "unchanged"
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(content)
    return "created" if previous is None else "updated"


def make_renderer(settings: Settings) -> Renderer:
    """Build a Renderer from settings; a missing default layout is fatal."""
    try:
        return Renderer(
            default_layout=settings.default_layout,
            strict=settings.strict,
            templates_dir=Path(settings.templates_dir) if settings.templates_dir else None,
            parser_config=settings.parser_config,
            separator=settings.post_separator,
            site_title=settings.site_title,
        )
    except (UnknownLayoutError, KeyError) as e:
        raise SiteBuildError(f"Cannot set up renderer: {e}") from e


def _prepare_dirs(src_dir: Path, out_dir: Path) -> None:
    if not src_dir.is_dir():
        raise SiteBuildError(f"Source directory not found: {src_dir}")
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SiteBuildError(f"Cannot create output directory {out_dir}: {e}") from e


def build_site(src_dir: Path, out_dir: Path, settings: Settings) -> BuildReport:
    """Render every post in src_dir to out_dir/<slug>.html plus index.html and index.json.

    Only directory-level problems raise (SiteBuildError); per-file problems are
    collected into the returned report.
    """
    src_dir, out_dir = Path(src_dir), Path(out_dir)
    _prepare_dirs(src_dir, out_dir)
    renderer = make_renderer(settings)

    collection = collect_posts(src_dir, settings.extensions, settings.post_separator)
    report = BuildReport(
        skipped=collection.skipped,
        failed=list(collection.failed),
        warnings=collection.warnings,
    )

    rendered = []
    for post in collection.posts:
        try:
            status = write_output(out_dir / f"{post.slug}.html", renderer.render(post))
        except (UnknownLayoutError, TemplateError, OSError) as e:
            logger.warning("Failed to render %s: %s", post.path, e)
            report.failed.append(FileIssue.from_error(post.path, e))
            continue
        logger.debug("%s: %s", status, post.slug)
        report.succeeded.append((status, post.slug))
        rendered.append(post)

    try:
        write_output(out_dir / INDEX_HTML, renderer.render_index(rendered))
        write_output(
            out_dir / INDEX_JSON,
            json.dumps(renderer.feed(rendered), indent=2, ensure_ascii=False) + "\n",
        )
    except OSError as e:
        raise SiteBuildError(f"Cannot write index to {out_dir}: {e}") from e
    return report
