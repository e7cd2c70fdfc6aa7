"""Unit tests for core/render.py"""

from datetime import date

import pytest

from mdblog.core.models import PostRecord
from mdblog.core.render import Renderer, long_date, split_sections
from mdblog.errors import UnknownLayoutError


def _post(body="Hello *world*\n", **metadata) -> PostRecord:
    return PostRecord(slug="hello", published=date(2023, 5, 9), metadata=metadata, body=body)


@pytest.fixture(name="renderer")
def renderer_fixture():
    return Renderer(separator="<!--split-->", site_title="Test Blog")


# --- split_sections ---

def test_split_sections_on_separator_line():
    assert split_sections("a\n<!--split-->\nb\n", "<!--split-->") == ["a\n", "b\n"]


def test_split_sections_ignores_fenced_separator():
    body = "```\n<!--split-->\n```\n"
    assert split_sections(body, "<!--split-->") == [body]


def test_split_sections_without_separator():
    assert split_sections("a\n", None) == ["a\n"]


# --- layout selection ---

def test_select_layout_known(renderer):
    assert renderer.select_layout(_post(layout="post")) == "post"


def test_select_layout_absent_uses_default(renderer):
    assert renderer.select_layout(_post()) == "default"


def test_select_layout_unknown_falls_back(renderer):
    assert renderer.select_layout(_post(layout="nonexistent")) == "default"


def test_select_layout_unknown_strict():
    strict = Renderer(strict=True)
    with pytest.raises(UnknownLayoutError, match="nonexistent"):
        strict.select_layout(_post(layout="nonexistent"))


def test_index_and_private_templates_are_not_layouts(renderer):
    assert {"default", "post", "page"} <= renderer.layouts
    assert "index" not in renderer.layouts
    assert "_base" not in renderer.layouts


def test_missing_default_layout_rejected():
    with pytest.raises(UnknownLayoutError):
        Renderer(default_layout="nope")


def test_user_templates_take_precedence(tmp_path):
    (tmp_path / "post.html").write_text("custom {{ post.slug }}")
    (tmp_path / "gallery.html").write_text("gallery {{ post.title }}")
    renderer = Renderer(templates_dir=tmp_path)
    assert renderer.render(_post(layout="post")) == "custom hello"
    assert renderer.render(_post(layout="gallery", title="Pics")) == "gallery Pics"


# --- render ---

def test_render_markdown_constructs(renderer):
    body = (
        "# Title\n\n"
        "- one\n- two\n\n"
        "[link](https://example.com) and **bold**\n\n"
        "| a | b |\n|---|---|\n| 1 | 2 |\n\n"
        "```python\nprint(\"hi\")\n```\n"
    )
    html = renderer.render(_post(body=body))
    assert "<h1>Title</h1>" in html
    assert "<li>one</li>" in html
    assert '<a href="https://example.com">link</a>' in html
    assert "<strong>bold</strong>" in html
    assert "<table>" in html
    assert 'class="language-python"' in html
    assert "print(&quot;hi&quot;)" in html


def test_render_post_layout_threads_metadata(renderer):
    post = _post(
        layout="post", title="Vue <3>", subtitle="Sub", tags=["vue", "js"], comments=True,
        **{"gh-repo": "me/repo", "gh-badge": ["star", "fork"]},
    )
    html = renderer.render(post)
    assert "<h1>Vue &lt;3&gt;</h1>" in html
    assert '<h2 class="subtitle">Sub</h2>' in html
    assert '<time datetime="2023-05-09">May 9, 2023</time>' in html
    assert '<li>vue</li>' in html
    assert 'data-repo="me/repo"' in html
    assert html.count('class="gh-badge"') == 2
    assert 'id="comments"' in html


def test_render_comments_disabled(renderer):
    html = renderer.render(_post(layout="post", comments=False))
    assert 'id="comments"' not in html


def test_render_unknown_layout_uses_default(renderer):
    html = renderer.render(_post(layout="nonexistent", title="T"))
    assert "<header>" not in html
    assert "<h1>T</h1>" in html


def test_render_separator_emits_sections(renderer):
    html = renderer.render(_post(body="First part\n\n<!--split-->\n\nSecond part\n"))
    assert html.count("<section>") == 2
    assert "<p>First part</p>" in html
    assert "<p>Second part</p>" in html


def test_render_is_idempotent(renderer):
    post = _post(layout="post", title="Same", tags=["a"])
    assert renderer.render(post) == renderer.render(post)


# --- index ---

def test_render_index_lists_posts_in_order(renderer):
    newer = PostRecord(slug="newer", published=date(2023, 5, 9), metadata={"title": "Newer", "subtitle": "S"}, body="")
    older = PostRecord(slug="older", published=date(2022, 2, 28), metadata={}, body="")
    html = renderer.render_index([newer, older])
    assert html.index('href="newer.html"') < html.index('href="older.html"')
    assert '<span class="subtitle">S</span>' in html
    assert ">older</a>" in html
    assert "<h1>Test Blog</h1>" in html


def test_feed_entries(renderer):
    post = _post(title="T", tags=["x"])
    assert renderer.feed([post]) == [{
        "slug": "hello", "date": "2023-05-09", "title": "T",
        "subtitle": None, "tags": ["x"], "url": "hello.html",
    }]


@pytest.mark.parametrize("day,expected", [
    (date(2023, 5, 9), "May 9, 2023"),
    (date(2022, 12, 31), "December 31, 2022"),
    (date(2024, 1, 1), "January 1, 2024"),
])
def test_long_date_is_locale_independent(day, expected):
    assert long_date(day) == expected
