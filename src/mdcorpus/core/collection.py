"""Immutable, ordered, queryable snapshot of validated documents"""

import posixpath
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from mdcorpus.core.errors import DocumentNotFound, DuplicateSlugError
from mdcorpus.core.links import DEFAULT_LINK_PREFIX, extract_links, link_target_slug
from mdcorpus.core.models import Document
from mdcorpus.core.utils.hashing import sha256_lines


def listing_key(doc: Document) -> tuple[int, str]:
    """Sort key: newest published first, ties broken by slug ascending."""
    return (-doc.published_at.toordinal(), doc.slug)


class Collection:
    """Documents ordered by listing_key, indexed by slug.

    Built once by the loader and never mutated afterwards; every accessor
    returns tuples or frozen documents.
    """

    __slots__ = ("_docs", "_by_slug")

    def __init__(self, documents: Iterable[Document] = ()):
        docs = sorted(documents, key=listing_key)
        by_slug: dict[str, Document] = {}
        for doc in docs:
            if doc.slug in by_slug:
                raise DuplicateSlugError(doc.slug, sorted([by_slug[doc.slug].path, doc.path]))
            by_slug[doc.slug] = doc
        self._docs = tuple(docs)
        self._by_slug = MappingProxyType(by_slug)

    def all(self) -> tuple[Document, ...]:
        return self._docs

    def by_slug(self, slug: str) -> Document:
        """Return the document with slug; raises DocumentNotFound if absent."""
        try:
            return self._by_slug[slug]
        except KeyError:
            raise DocumentNotFound(slug) from None

    def get(self, slug: str, default: Optional[Document] = None) -> Optional[Document]:
        return self._by_slug.get(slug, default)

    def list_by_tag(self, tag: str) -> tuple[Document, ...]:
        """Documents carrying tag, in listing order; empty when none match."""
        return tuple(d for d in self._docs if tag in d.tags)

    def tags(self) -> dict[str, int]:
        """Tag -> document count, ordered by first appearance in listing order."""
        counts: dict[str, int] = {}
        for doc in self._docs:
            for tag in doc.tags:
                counts[tag] = counts.get(tag, 0) + 1
        return counts

    def fingerprint(self) -> str:
        """Hash of the ordered (slug, content hash) pairs; equal for unchanged sources."""
        return sha256_lines(f"{d.slug}\t{d.hash}" for d in self._docs)

    def outbound_slugs(self, doc: Document, prefix: str = DEFAULT_LINK_PREFIX) -> tuple[str, ...]:
        """Slugs of documents in this collection that doc links to."""
        base = posixpath.dirname(doc.slug)
        slugs = (link_target_slug(href, prefix, base) for href in extract_links(doc.body))
        return tuple(dict.fromkeys(s for s in slugs if s in self._by_slug and s != doc.slug))

    def backlinks(self, slug: str, prefix: str = DEFAULT_LINK_PREFIX) -> tuple[Document, ...]:
        """Documents whose bodies link to slug, in listing order."""
        self.by_slug(slug)
        return tuple(d for d in self._docs if slug in self.outbound_slugs(d, prefix))

    def __len__(self) -> int:
        return len(self._docs)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._docs)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return self._docs == other._docs

    def __repr__(self) -> str:
        return f"Collection({len(self._docs)} documents)"
