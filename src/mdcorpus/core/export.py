"""Front-matter re-serialization and JSON index export"""

import json
from pathlib import Path
from typing import Any

import yaml

from mdcorpus.core.collection import Collection
from mdcorpus.core.models import Document


def front_matter_dict(doc: Document) -> dict[str, Any]:
    """Return the document's front matter under its on-disk keys; optional keys only when set."""
    fm: dict[str, Any] = {
        "title": doc.title,
        "publishedAt": doc.published_at.isoformat(),
    }
    if doc.updated_at is not None:
        fm["updatedAt"] = doc.updated_at.isoformat()
    fm["summary"] = doc.summary
    if doc.tags:
        fm["tags"] = list(doc.tags)
    if doc.image is not None:
        fm["image"] = doc.image
    if doc.draft is not None:
        fm["draft"] = doc.draft
    return fm


def dump_front_matter(doc: Document) -> str:
    """Return a '---' delimited YAML header that parses back to the same values."""
    header = yaml.safe_dump(
        front_matter_dict(doc), default_flow_style=False, allow_unicode=True, sort_keys=False,
    )
    return f"---\n{header}---\n"


def build_source(doc: Document) -> str:
    """Reassemble the full document text: front matter followed by the raw body."""
    return dump_front_matter(doc) + doc.body


def build_entry(doc: Document) -> dict[str, Any]:
    """Listing entry for one document: slug, path, hash, and front matter (no body)."""
    return {"slug": doc.slug, "path": doc.path, "hash": doc.hash, **front_matter_dict(doc)}


def build_index(collection: Collection) -> dict[str, Any]:
    """JSON-ready listing of the collection in listing order."""
    return {
        "fingerprint": collection.fingerprint(),
        "count": len(collection),
        "documents": [build_entry(d) for d in collection.all()],
    }


def build_tag_index(collection: Collection) -> dict[str, list[str]]:
    """Tag -> slugs in listing order."""
    return {
        tag: [d.slug for d in collection.list_by_tag(tag)]
        for tag in collection.tags()
    }


def write_index(collection: Collection, output_dir: Path) -> tuple[Path, Path]:
    """Write index.json and tags.json to output_dir. Returns (index_path, tags_path)."""
    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / "index.json"
    tags_path = output_dir / "tags.json"
    index_path.write_text(
        json.dumps(build_index(collection), indent=2, ensure_ascii=False), encoding="utf-8",
    )
    tags_path.write_text(
        json.dumps(build_tag_index(collection), indent=2, ensure_ascii=False), encoding="utf-8",
    )
    return index_path, tags_path
