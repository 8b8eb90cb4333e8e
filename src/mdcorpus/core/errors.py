"""Error taxonomy for loading a content collection"""

from pathlib import Path
from typing import Optional, Sequence


class ContentError(Exception):
    """Base class for all content collection errors."""


class ContentIOError(ContentError, OSError):
    """The source directory or a document file could not be read."""

    def __init__(self, path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SchemaError(ContentError):
    """A front-matter field is missing, malformed, or violates an invariant."""

    def __init__(self, slug: str, field: str, reason: str, path: Optional[str] = None):
        self.slug = slug
        self.field = field
        self.reason = reason
        self.path = path
        super().__init__(f"{path or slug}: {field}: {reason}")


class DuplicateSlugError(ContentError):
    """Two or more source files resolve to the same slug."""

    def __init__(self, slug: str, paths: Sequence[str]):
        self.slug = slug
        self.paths = tuple(paths)
        super().__init__(f"duplicate slug '{slug}': {', '.join(self.paths)}")


class LoadError(ContentError):
    """Every error collected while loading a source directory."""

    def __init__(self, source, errors: Sequence[ContentError]):
        self.source = Path(source)
        self.errors = tuple(errors)
        lines = [f"{len(self.errors)} error(s) loading {source}:"]
        lines += [f"  - {e}" for e in self.errors]
        super().__init__("\n".join(lines))


class DocumentNotFound(ContentError, KeyError):
    """No document with the requested slug exists in the collection."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(slug)

    def __str__(self) -> str:
        return f"no document with slug '{self.slug}'"
