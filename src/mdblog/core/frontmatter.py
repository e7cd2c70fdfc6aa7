"""Front matter extraction: `---` delimited key/value header at the top of a post"""

import re
from typing import Union

from mdblog.errors import MalformedFrontMatterError


DELIMITER = "---"
QUOTES = "\"'"

# One quoted list item ("" or '' escapes its own quote), then a comma or the end.
QUOTED_ITEM_RE = re.compile(r'\s*(?:"((?:[^"]|"")*)"|\'((?:[^\']|\'\')*)\')\s*(,|$)')

MetaValue = Union[str, bool, list[str]]


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def _unquote(value: str) -> str | None:
    """Return value without its surrounding quotes, else None.

    Only a wrapping pair whose inner text has no lone copy of the same quote
    counts; a doubled quote inside stands for one literal quote.
    """
    if len(value) < 2 or value[0] != value[-1] or value[0] not in QUOTES:
        return None
    quote, inner = value[0], value[1:-1]
    if quote in inner.replace(quote * 2, ""):
        return None
    return inner.replace(quote * 2, quote)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def split_list(inner: str) -> list[str]:
    """Split the inside of a [...] value on commas that are not inside quoted items."""
    items: list[str] = []
    pos = 0
    while True:
        m = QUOTED_ITEM_RE.match(inner, pos)
        if m:
            if m.group(1) is not None:
                items.append(m.group(1).replace('""', '"'))
            else:
                items.append(m.group(2).replace("''", "'"))
            more, pos = m.group(3) == ",", m.end()
        else:
            comma = inner.find(",", pos)
            end = len(inner) if comma == -1 else comma
            items.append(inner[pos:end].strip())
            more, pos = comma != -1, end + 1
        if not more:
            return items


def parse_value(raw: str) -> MetaValue:
    """Convert a raw front matter value: [a, b] -> list, true/false -> bool, anything else -> str."""
    value = raw.strip()
    quoted = _unquote(value)
    if quoted is not None:
        return quoted
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return split_list(inner)
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def parse_frontmatter(text: str) -> tuple[dict[str, MetaValue], str]:
    """Return (metadata, body).

    Without a leading `---` line the metadata is empty and the body is the
    input unchanged. The body starts after the closing `---` line with leading
    blank lines removed.
    """
    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return {}, text

    metadata: dict[str, MetaValue] = {}
    for i, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            rest = lines[i + 1:]
            while rest and not rest[0].strip():
                rest.pop(0)
            return metadata, "".join(rest)

        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition(":")
        if not sep or not key.strip():
            raise MalformedFrontMatterError(f"line {i + 1}: expected 'key: value', got {stripped!r}")
        metadata[key.strip()] = parse_value(value)

    raise MalformedFrontMatterError(f"no closing '{DELIMITER}' before end of file")


def _dump_str(value: str) -> str:
    needs_quotes = (
        value != value.strip()
        or value in ("true", "false")
        or (value.startswith("[") and value.endswith("]"))
        or _unquote(value) is not None
    )
    return _quote(value) if needs_quotes else value


def _dump_item(item: str) -> str:
    if not item or item != item.strip() or "," in item or item[0] in QUOTES:
        return _quote(item)
    return item


def _dump_value(value: MetaValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_dump_item(str(v)) for v in value) + "]"
    return _dump_str(str(value))


def dump_frontmatter(metadata: dict[str, MetaValue]) -> str:
    """Serialise metadata back to a `---` delimited block that parse_frontmatter reads identically."""
    lines = [DELIMITER]
    lines += [f"{key}: {_dump_value(value)}" for key, value in metadata.items()]
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"
