"""Outbound link extraction from document bodies via markdown-it tokens"""

import posixpath
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urlsplit

from markdown_it import MarkdownIt

from mdcorpus.core.parse import MD_EXTENSIONS
from mdcorpus.core.utils.slug import slug_for_path


DEFAULT_LINK_PREFIX = "/blog/"


@lru_cache(maxsize=None)
def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def extract_links(body: str, parser_config: str = "gfm-like") -> list[str]:
    """Return distinct link hrefs in body, in order of first appearance."""
    hrefs: dict[str, None] = {}
    for token in _make_parser(parser_config).parse(body):
        for child in token.children or ():
            if child.type == "link_open":
                href = child.attrGet("href")
                if href:
                    hrefs[str(href)] = None
    return list(hrefs)


def is_external(href: str) -> bool:
    parts = urlsplit(href)
    return bool(parts.scheme or parts.netloc)


def link_target_slug(href: str, prefix: str = DEFAULT_LINK_PREFIX, base: str = "") -> Optional[str]:
    """Resolve an internal href to a document slug, or None for external/asset links.

    Relative hrefs are resolved against base, the directory part of the linking
    document's slug: with base 'guides', './b.md' -> 'guides/b' and '../a' -> 'a'.
    '/blog/my-post#intro' -> 'my-post'.
    """
    if is_external(href):
        return None
    path = urlsplit(href).path
    if not path:
        return None
    if path.startswith(prefix):
        return path[len(prefix):].strip('/') or None
    if path.startswith('/'):
        return None
    resolved = posixpath.normpath(posixpath.join(base, path))
    if resolved in ('.', '..') or resolved.startswith('../'):
        return None
    rel = PurePosixPath(resolved)
    if rel.suffix and rel.suffix.lower() not in MD_EXTENSIONS:
        return None
    return slug_for_path(rel) or None
