"""Post discovery: dated filenames, front matter parsing, ordering"""

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator

from mdblog.core.frontmatter import parse_frontmatter
from mdblog.core.models import Collection, FileIssue, PostRecord
from mdblog.core.utils.slug import slugify
from mdblog.errors import DuplicateSlugError, InvalidFilenameError, MdblogError


logger = logging.getLogger(__name__)

DATE_PREFIX_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})-')
DEFAULT_EXTENSIONS = ('.md', '.markdown')
RESERVED_SLUGS = frozenset({"index"})


def is_post_filename(path: Path) -> bool:
    """True when the filename starts with a YYYY-MM-DD- prefix (valid or not)."""
    return DATE_PREFIX_RE.match(path.name) is not None


def parse_post_filename(path: Path) -> tuple[date, str]:
    """Return (published, slug) from a YYYY-MM-DD-<slug>.<ext> filename."""
    m = DATE_PREFIX_RE.match(path.name)
    if m is None:
        raise InvalidFilenameError(f"{path.name}: expected YYYY-MM-DD-<slug>.<ext>")
    try:
        published = date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as e:
        raise InvalidFilenameError(f"{path.name}: {e}") from e
    rest = path.name[m.end():]
    stem = rest[:-len(path.suffix)] if path.suffix else rest
    slug = slugify(stem)
    if not slug:
        raise InvalidFilenameError(f"{path.name}: empty slug after date prefix")
    if slug in RESERVED_SLUGS:
        raise InvalidFilenameError(f"{path.name}: slug '{slug}' is reserved for the site index")
    return published, slug


def discover_files(src_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[Path]:
    """Return files directly under src_dir with a matching suffix, sorted by name."""
    suffixes = {e.lower() for e in extensions}
    return sorted(p for p in src_dir.iterdir() if p.is_file() and p.suffix.lower() in suffixes)


FENCE_MARKERS = ("```", "~~~")


def iter_body_lines(body: str) -> Iterator[tuple[str, bool]]:
    """Yield (line, inside_code_fence) for each line of body, keeping line endings."""
    fence: str | None = None
    for line in body.splitlines(keepends=True):
        stripped = line.strip()
        marker = next((m for m in FENCE_MARKERS if stripped.startswith(m)), None)
        if marker and fence is None:
            fence = marker
            yield line, True
        elif marker and marker == fence:
            fence = None
            yield line, True
        else:
            yield line, fence is not None


def find_separators(body: str, separator: str) -> list[int]:
    """Return 1-based body line numbers, outside code fences, holding only the separator token."""
    return [
        i for i, (line, fenced) in enumerate(iter_body_lines(body), start=1)
        if not fenced and line.strip() == separator
    ]


def load_post(path: Path) -> PostRecord:
    """Parse a single post file into a PostRecord."""
    published, slug = parse_post_filename(path)
    metadata, body = parse_frontmatter(path.read_text(encoding='utf-8'))
    return PostRecord(slug=slug, published=published, metadata=metadata, body=body, path=str(path))


def sort_posts(posts: Iterable[PostRecord]) -> list[PostRecord]:
    """Most recent first; same-day posts by slug ascending."""
    return sorted(posts, key=lambda p: (-p.published.toordinal(), p.slug))


def collect_posts(
    src_dir: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    separator: str | None = None,
    ) -> Collection:
    """Scan src_dir for posts. Per-file failures are recorded, never raised."""
    result = Collection()
    seen: dict[str, str] = {}

    for path in discover_files(src_dir, extensions):
        if not is_post_filename(path):
            logger.debug("Skipping %s: not a dated post filename", path)
            result.skipped.append(str(path))
            continue
        try:
            post = load_post(path)
            if post.slug in seen:
                raise DuplicateSlugError(f"slug '{post.slug}' already used by {seen[post.slug]}")
        except (MdblogError, OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to load %s: %s", path, e)
            result.failed.append(FileIssue.from_error(path, e))
            continue

        seen[post.slug] = str(path)
        result.posts.append(post)
        if separator:
            for lineno in find_separators(post.body, separator):
                msg = f"separator '{separator}' at body line {lineno}; file treated as a single post"
                logger.warning("%s: %s", path, msg)
                result.warnings.append(FileIssue(path=str(path), kind="SeparatorWarning", message=msg))

    result.posts = sort_posts(result.posts)
    return result
