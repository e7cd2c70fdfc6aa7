"""Root test configuration: sample post fixtures"""

from pathlib import Path

import pytest


VUE_POST = """\
---
layout: post
title: Vue 2 vs Vue 3
subtitle: What changed between the two major versions
gh-repo: example/vue-notes
gh-badge: [star, fork, follow]
tags: [vue, javascript]
comments: false
---

# Overview

Vue 3 ships the **Composition API**.

| Feature | Vue 2 | Vue 3 |
|---------|-------|-------|
| Fragments | no | yes |

```js
const app = createApp(App)
```
"""

REACT_POST = """\
---
layout: post
title: React rendering tips
tags: [react]
comments: true
---

- memoize expensive children
- keep state local
"""


def write_posts(directory: Path, posts: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in posts.items():
        (directory / name).write_text(text, encoding="utf-8")
    return directory


@pytest.fixture(name="make_posts")
def make_posts_fixture(tmp_path):
    """Factory writing {filename: text} into a directory under tmp_path."""
    def _make(posts: dict[str, str], name: str = "src") -> Path:
        return write_posts(tmp_path / name, posts)
    return _make


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    """Source directory holding two valid posts."""
    return write_posts(tmp_path / "_posts", {
        "2022-02-28-react-rendering-tips.md": REACT_POST,
        "2023-05-09-vue-2-vs-vue-3.md": VUE_POST,
    })


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so config.yaml lookups are isolated."""
    monkeypatch.chdir(tmp_path)
    for name in ("SRC_DIR", "OUTPUT_DIR", "STRICT", "DEFAULT_LAYOUT", "TEMPLATES_DIR", "POST_SEPARATOR", "EXTENSIONS"):
        monkeypatch.delenv(f"MDBLOG_{name}", raising=False)
