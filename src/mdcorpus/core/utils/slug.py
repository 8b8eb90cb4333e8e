"""Slug generation for document identifiers"""

import re
from pathlib import PurePath


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def slug_for_path(rel_path: PurePath) -> str:
    """Derive a slug from a path relative to the content root.

    'My Post.mdx' -> 'my-post'; 'Guides/CSS Theming.md' -> 'guides/css-theming'.
    Returns '' if any segment slugifies to nothing.
    """
    parts = [slugify(p) for p in (*rel_path.parent.parts, rel_path.stem)]
    if not all(parts):
        return ''
    return '/'.join(parts)
