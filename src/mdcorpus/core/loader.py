"""Load a content directory into a validated Collection, failing on any error"""

from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from mdcorpus.core.collection import Collection
from mdcorpus.core.errors import ContentError, DuplicateSlugError, LoadError, SchemaError
from mdcorpus.core.models import Document
from mdcorpus.core.parse import MD_EXTENSIONS, discover_files, parse_file
from mdcorpus.core.schema import validate_frontmatter
from mdcorpus.core.utils.slug import slug_for_path


logger = structlog.get_logger()


def _load_one(path: Path, root: Path) -> tuple[Optional[Document], list[SchemaError]]:
    """Parse and validate one file. ContentIOError propagates; schema problems are returned."""
    try:
        parsed = parse_file(path, root)
    except SchemaError as e:
        return None, [e]

    rel = parsed.path.as_posix()
    if not parsed.slug:
        return None, [SchemaError(parsed.slug, "slug", "filename does not produce a slug", rel)]

    fm, errors = validate_frontmatter(parsed.frontmatter, parsed.slug, rel)
    if errors:
        return None, errors

    logger.debug("document_parsed", slug=parsed.slug, path=rel)
    return Document(
        slug=parsed.slug,
        path=rel,
        title=fm.title,
        published_at=fm.published_at,
        updated_at=fm.updated_at,
        summary=fm.summary,
        tags=fm.tags,
        image=fm.image,
        draft=fm.draft,
        body=parsed.markdown,
        hash=parsed.hash,
    ), []


def _duplicate_slugs(files: list[Path], root: Path) -> list[DuplicateSlugError]:
    """Group files by derived slug and report every slug claimed more than once."""
    by_slug: dict[str, list[str]] = defaultdict(list)
    for p in files:
        rel = p.relative_to(root)
        slug = slug_for_path(rel)
        if slug:
            by_slug[slug].append(rel.as_posix())
    return [
        DuplicateSlugError(slug, sorted(paths))
        for slug, paths in sorted(by_slug.items())
        if len(paths) > 1
    ]


def load(
    source_dir: Union[str, Path],
    *,
    recursive: bool = False,
    extensions: Iterable[str] = MD_EXTENSIONS,
    workers: int = 1,
    ) -> Collection:
    """Load every document under source_dir into an immutable Collection.

    All schema and duplicate-slug errors are collected and raised together as
    a LoadError; a partially valid collection is never returned. Raises
    ContentIOError if the directory or any file cannot be read.
    """
    root = Path(source_dir)
    files = discover_files(root, recursive, extensions)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(partial(_load_one, root=root), files))
    else:
        results = [_load_one(p, root) for p in files]

    errors: list[ContentError] = []
    docs = []
    for doc, doc_errors in results:
        errors.extend(doc_errors)
        if doc is not None:
            docs.append(doc)
    errors.extend(_duplicate_slugs(files, root))

    if errors:
        logger.error("collection_load_failed", source=str(root), files=len(files), errors=len(errors))
        raise LoadError(root, errors)

    collection = Collection(docs)
    logger.info("collection_loaded", source=str(root), documents=len(collection))
    return collection
