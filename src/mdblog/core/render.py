"""Markdown to HTML conversion and Jinja2 layout selection"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown_it import MarkdownIt

from mdblog.core.collect import iter_body_lines
from mdblog.core.models import PostRecord
from mdblog.errors import UnknownLayoutError


logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"
INDEX_TEMPLATE = "index"
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_sections(body: str, separator: Optional[str]) -> list[str]:
    """Split body on lines equal to separator, ignoring lines inside code fences."""
    if not separator:
        return [body]
    sections: list[list[str]] = [[]]
    for line, fenced in iter_body_lines(body):
        if not fenced and line.strip() == separator:
            sections.append([])
            continue
        sections[-1].append(line)
    return ["".join(s) for s in sections]


def long_date(value: date) -> str:
    """Format a date as "May 9, 2023" independent of the process locale."""
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"


def post_url(post: PostRecord) -> str:
    return f"{post.slug}.html"


class Renderer:
    """Render PostRecords through named layouts.

    Layout templates are `<layout>.html` files, searched in templates_dir first
    and then in the built-in template directory. Names starting with an
    underscore and the index template are not selectable as layouts.
    """

    def __init__(
        self,
        default_layout: str = "default",
        strict: bool = False,
        templates_dir: Optional[Path] = None,
        parser_config: str = "gfm-like",
        separator: Optional[str] = None,
        site_title: str = "Blog",
        ):
        search_path = [str(BUILTIN_TEMPLATES)]
        if templates_dir is not None:
            search_path.insert(0, str(templates_dir))
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )
        self.env.filters["long_date"] = long_date
        self.md = _make_parser(parser_config)
        self.strict = strict
        self.separator = separator
        self.site_title = site_title
        self.layouts = self._discover_layouts()
        if default_layout not in self.layouts:
            raise UnknownLayoutError(f"default layout '{default_layout}' has no template")
        self.default_layout = default_layout

    def _discover_layouts(self) -> set[str]:
        names = {Path(t).stem for t in self.env.list_templates(extensions=["html"]) if "/" not in t}
        return {n for n in names if not n.startswith("_") and n != INDEX_TEMPLATE}

    def select_layout(self, post: PostRecord) -> str:
        """Return the layout name for post, falling back to the default unless strict."""
        layout = post.layout
        if layout is None:
            return self.default_layout
        if layout not in self.layouts:
            if self.strict:
                raise UnknownLayoutError(f"{post.slug}: no template for layout '{layout}'")
            logger.debug("%s: unknown layout '%s', using '%s'", post.slug, layout, self.default_layout)
            return self.default_layout
        return layout

    def render_body(self, body: str) -> list[str]:
        """Convert markdown body to one HTML fragment per separator-delimited section."""
        return [self.md.render(s) for s in split_sections(body, self.separator) if s.strip()]

    def render(self, post: PostRecord) -> str:
        """Render a post to a complete HTML document."""
        template = self.env.get_template(f"{self.select_layout(post)}.html")
        return template.render(
            post=post,
            meta=post.metadata,
            sections=self.render_body(post.body),
            site_title=self.site_title,
        )

    def render_index(self, posts: list[PostRecord]) -> str:
        """Render the index page listing posts in the order given."""
        template = self.env.get_template(f"{INDEX_TEMPLATE}.html")
        return template.render(posts=posts, post_url=post_url, site_title=self.site_title)

    def feed(self, posts: list[PostRecord]) -> list[dict]:
        """Return JSON-serialisable index entries for posts."""
        return [
            {
                "slug": p.slug,
                "date": p.published.isoformat(),
                "title": p.title,
                "subtitle": p.subtitle,
                "tags": p.tags,
                "url": post_url(p),
            }
            for p in posts
        ]
