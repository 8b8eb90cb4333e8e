"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdcorpus.config import Settings, load_config
from mdcorpus.core.collection import Collection
from mdcorpus.core.errors import ContentIOError, DocumentNotFound, LoadError
from mdcorpus.core.export import dump_front_matter, write_index
from mdcorpus.core.links import extract_links, is_external
from mdcorpus.core.loader import load


PathArg = Annotated[Optional[str], typer.Argument(help="Content directory (defaults to content_dir setting)")]
RecursiveOpt = Annotated[Optional[bool], typer.Option("--recursive/--flat", help="Descend into subdirectories")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _load(path: Optional[str], recursive: Optional[bool]) -> tuple[Settings, Collection]:
    """Load the collection, printing every collected error before exiting 1."""
    settings = _settings(overrides={"content_dir": path, "recursive": recursive})
    try:
        collection = load(
            settings.content_dir,
            recursive=settings.recursive,
            extensions=settings.extensions,
            workers=settings.workers,
        )
    except ContentIOError as e:
        _fail("Cannot read content", e)
    except LoadError as e:
        typer.echo(f"Error: {len(e.errors)} problem(s) in {e.source}", err=True)
        for err in e.errors:
            typer.echo(f"  {err}", err=True)
        raise typer.Exit(1)
    return settings, collection


def check_cmd(path: PathArg = None, recursive: RecursiveOpt = None):
    """Validate every document; report all problems at once."""
    _, collection = _load(path, recursive)
    typer.echo(f"OK - {len(collection)} document(s), {len(collection.tags())} tag(s)")


def list_cmd(
    path: PathArg = None,
    recursive: RecursiveOpt = None,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only documents carrying this tag")] = None,
    ):
    """List documents newest first."""
    _, collection = _load(path, recursive)
    docs = collection.list_by_tag(tag) if tag else collection.all()
    if not docs:
        typer.echo(f"No documents found{f' tagged {tag!r}' if tag else ''}.")
        raise typer.Exit(1)
    for doc in docs:
        typer.echo(f"{doc.published_at.isoformat()}  {doc.slug}  {doc.title}")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Document slug")],
    path: PathArg = None,
    recursive: RecursiveOpt = None,
    body: Annotated[bool, typer.Option("--body", help="Also print the raw body")] = False,
    ):
    """Print a document's front matter (and optionally its body)."""
    _, collection = _load(path, recursive)
    try:
        doc = collection.by_slug(slug)
    except DocumentNotFound as e:
        _fail(str(e))
    typer.echo(f"# {doc.path}")
    typer.echo(dump_front_matter(doc), nl=False)
    if body:
        typer.echo(doc.body, nl=False)


def tags_cmd(path: PathArg = None, recursive: RecursiveOpt = None):
    """List tags with document counts."""
    _, collection = _load(path, recursive)
    tags = collection.tags()
    if not tags:
        typer.echo("No tags found.")
        raise typer.Exit(1)
    for tag, count in tags.items():
        typer.echo(f"{count:4d}  {tag}")


def links_cmd(
    slug: Annotated[str, typer.Argument(help="Document slug")],
    path: PathArg = None,
    recursive: RecursiveOpt = None,
    ):
    """Show a document's outbound links and the documents linking to it."""
    settings, collection = _load(path, recursive)
    try:
        doc = collection.by_slug(slug)
    except DocumentNotFound as e:
        _fail(str(e))
    hrefs = extract_links(doc.body)
    typer.echo(f"Outbound ({len(hrefs)}):")
    for href in hrefs:
        typer.echo(f"  {'external' if is_external(href) else 'internal'}  {href}")
    backlinks = collection.backlinks(slug, settings.link_prefix)
    typer.echo(f"Backlinks ({len(backlinks)}):")
    for d in backlinks:
        typer.echo(f"  {d.slug}")


def export_cmd(
    path: PathArg = None,
    recursive: RecursiveOpt = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Write index.json and tags.json for the validated collection."""
    settings, collection = _load(path, recursive)
    output_dir = Path(out or settings.output_dir)
    try:
        index_path, tags_path = write_index(collection, output_dir)
    except OSError as e:
        _fail("Export failed", e)
    typer.echo(f"  index -> {index_path}")
    typer.echo(f"  tags  -> {tags_path}")
    typer.echo(f"Exported {len(collection)} document(s) to {output_dir}/")
