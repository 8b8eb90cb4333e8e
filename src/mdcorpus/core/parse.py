"""File discovery, front-matter splitting, and slug derivation"""

import re
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from mdcorpus.core.errors import ContentIOError, SchemaError
from mdcorpus.core.models import ParsedDoc
from mdcorpus.core.utils.hashing import sha256
from mdcorpus.core.utils.slug import slug_for_path


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = ('.md', '.mdx')
_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as strings so the schema owns date parsing."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_frontmatter(text: str) -> tuple[Optional[dict[str, Any]], str]:
    """Return (frontmatter_dict, body); frontmatter is None when the file has no header.

    Raises ValueError on invalid YAML or a header that is not a mapping.
    """
    text = text.removeprefix('\ufeff')
    m = FRONTMATTER_RE.match(text)
    if not m:
        return None, text
    try:
        fm = yaml.load(m.group(1), Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML: {e}") from e
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        raise ValueError(f"expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def _is_hidden(rel: Path) -> bool:
    return any(part.startswith('.') for part in rel.parts)


def discover_files(
    root: Path,
    recursive: bool = False,
    extensions: Iterable[str] = MD_EXTENSIONS,
    ) -> list[Path]:
    """Return sorted document files under root, skipping dotfiles and dot-directories.

    Raises ContentIOError if root is missing, not a directory, or unreadable.
    """
    exts = {e.lower() if e.startswith('.') else f'.{e.lower()}' for e in extensions}
    if not root.exists():
        raise ContentIOError(root, "no such directory")
    if not root.is_dir():
        raise ContentIOError(root, "not a directory")
    try:
        entries = root.rglob('*') if recursive else root.iterdir()
        return sorted(
            p for p in entries
            if p.suffix.lower() in exts and not _is_hidden(p.relative_to(root)) and p.is_file()
        )
    except OSError as e:
        raise ContentIOError(root, e.strerror or str(e)) from e


def parse_file(path: Path, root: Path) -> ParsedDoc:
    """Read one file and split its front matter from the body.

    Raises ContentIOError if the file cannot be read and SchemaError if it is
    not UTF-8 or its front-matter block is missing or malformed.
    """
    rel = path.relative_to(root)
    slug = slug_for_path(rel)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ContentIOError(path, e.strerror or str(e)) from e
    try:
        raw = data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise SchemaError(slug, "encoding", f"not valid UTF-8: {e.reason}", rel.as_posix()) from e
    try:
        frontmatter, body = split_frontmatter(raw)
    except ValueError as e:
        raise SchemaError(slug, "frontmatter", str(e), rel.as_posix()) from e
    if frontmatter is None:
        raise SchemaError(slug, "frontmatter", "missing '---' delimited front-matter block", rel.as_posix())
    return ParsedDoc(
        path=rel,
        slug=slug,
        raw_markdown=raw,
        markdown=body,
        hash=sha256(raw),
        frontmatter=frontmatter,
    )
