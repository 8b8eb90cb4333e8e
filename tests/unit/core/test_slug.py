"""Unit tests for core/utils/slug.py"""

from pathlib import PurePosixPath

import pytest

from mdcorpus.core.utils.slug import slug_for_path, slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated slug."""
    assert slugify(text) == expected


def test_slugify_preserves_hyphens():
    """slugify keeps existing hyphens intact."""
    assert slugify("already-slugified") == "already-slugified"


@pytest.mark.parametrize("path,expected", [
    ("My Post.mdx", "my-post"),
    ("my-post.md", "my-post"),
    ("nextjs_notion.mdx", "nextjs-notion"),
    ("Guides/CSS Theming.md", "guides/css-theming"),
])
def test_slug_for_path(path, expected):
    """slug_for_path slugifies the stem and each parent directory."""
    assert slug_for_path(PurePosixPath(path)) == expected


def test_slug_for_path_empty_segment():
    """slug_for_path returns '' when a segment has no slug-safe characters."""
    assert slug_for_path(PurePosixPath("!!!.md")) == ""
