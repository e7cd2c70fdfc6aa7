"""Slug generation for post identifiers"""

import re
import unicodedata


_UNSAFE_RE = re.compile(r'[^a-z0-9.]+')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug.

    Accents are folded to ASCII; dots survive so version numbers such as
    "vue-2.7" stay readable.
    """
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = _UNSAFE_RE.sub('-', text.lower())
    return text.strip('-.')
