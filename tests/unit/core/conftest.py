"""Shared fixtures for core unit tests"""

from datetime import date

import pytest

from mdcorpus.core.models import Document


SAMPLE_MDX = """\
---
title: Theming with CSS Variables
publishedAt: 2021-02-08
updatedAt: '2021-03-01'
summary: How to build a dark mode with custom properties.
tags: [css, theming, css]
---

import { ThemeToggle } from '../components/ThemeToggle'

# Theming

See [the animation post](/blog/css-animation) and [MDN](https://developer.mozilla.org).

<ThemeToggle />
"""


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Build a Document directly, bypassing the loader."""
    def _make(slug: str, published: str = "2021-01-22", tags=(), body: str = "", **kwargs) -> Document:
        return Document(
            slug=slug,
            path=f"{slug}.mdx",
            title=kwargs.pop("title", slug.replace("-", " ").title()),
            published_at=date.fromisoformat(published),
            summary=kwargs.pop("summary", f"About {slug}."),
            tags=tuple(tags),
            body=body,
            hash=kwargs.pop("hash", slug),
            **kwargs,
        )
    return _make


@pytest.fixture(name="sample_mdx")
def sample_mdx_fixture() -> str:
    return SAMPLE_MDX
