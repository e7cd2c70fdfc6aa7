"""Post records and build report models"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mdblog.core.frontmatter import MetaValue


class PostRecord(BaseModel):
    """One parsed post: filename-derived identity, open front matter, raw markdown body."""
    model_config = ConfigDict(frozen=True)

    slug:      str = Field(min_length=1)
    published: date
    metadata:  dict[str, MetaValue] = {}    # open key set, insertion ordered
    body:      str
    path:      str = ""

    def _text(self, key: str) -> Optional[str]:
        value = self.metadata.get(key)
        return value if isinstance(value, str) and value else None

    @property
    def title(self) -> str:
        return self._text("title") or self.slug

    @property
    def subtitle(self) -> Optional[str]:
        return self._text("subtitle")

    @property
    def layout(self) -> Optional[str]:
        return self._text("layout")

    @property
    def tags(self) -> list[str]:
        value = self.metadata.get("tags")
        return list(value) if isinstance(value, list) else []

    @property
    def comments(self) -> bool:
        return self.metadata.get("comments") is True


class FileIssue(BaseModel):
    """A per-file problem recorded during a build rather than raised."""
    path:    str
    kind:    str                            # exception class name, or SeparatorWarning
    message: str

    @classmethod
    def from_error(cls, path, error: Exception) -> "FileIssue":
        return cls(path=str(path), kind=type(error).__name__, message=str(error))


class Collection(BaseModel):
    """Result of scanning a source directory."""
    posts:    list[PostRecord] = []         # published desc, slug asc
    skipped:  list[str] = []
    failed:   list[FileIssue] = []
    warnings: list[FileIssue] = []


class BuildReport(BaseModel):
    """Aggregated outcome of one site build."""
    succeeded: list[tuple[str, str]] = []   # (status, slug); status is created/updated/unchanged
    skipped:   list[str] = []
    failed:    list[FileIssue] = []
    warnings:  list[FileIssue] = []

    @property
    def ok(self) -> bool:
        return not self.failed

    def counts(self) -> dict[str, int]:
        counts = {"created": 0, "updated": 0, "unchanged": 0}
        for status, _ in self.succeeded:
            counts[status] += 1
        counts["skipped"] = len(self.skipped)
        counts["failed"] = len(self.failed)
        return counts
