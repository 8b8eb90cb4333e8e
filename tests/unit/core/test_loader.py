"""Unit tests for core/loader.py"""

import pytest

from mdcorpus.core.collection import Collection
from mdcorpus.core.errors import ContentIOError, DuplicateSlugError, LoadError, SchemaError
from mdcorpus.core.loader import load


def test_load_empty_directory(content_dir):
    """An empty directory loads as an empty collection, not an error."""
    collection = load(content_dir)
    assert isinstance(collection, Collection)
    assert collection.all() == ()


def test_load_orders_by_date_descending(write_doc, content_dir):
    write_doc("first.mdx", publishedAt="2021-01-22")
    write_doc("second.mdx", publishedAt="2021-02-08")
    write_doc("third.mdx", publishedAt="2021-12-18")
    dates = [d.published_at.isoformat() for d in load(content_dir).all()]
    assert dates == ["2021-12-18", "2021-02-08", "2021-01-22"]


def test_load_document_fields(write_doc, content_dir):
    write_doc(
        "Theming With CSS.mdx",
        body="\n# Theming\n",
        title="Theming",
        updatedAt="2021-03-01",
        tags=["css", "theming", "css"],
        image="/static/images/theming.png",
    )
    doc = load(content_dir).by_slug("theming-with-css")
    assert doc.path == "Theming With CSS.mdx"
    assert doc.title == "Theming"
    assert doc.updated_at.isoformat() == "2021-03-01"
    assert doc.tags == ("css", "theming")
    assert doc.image == "/static/images/theming.png"
    assert doc.body == "\n# Theming\n"
    assert len(doc.hash) == 64


def test_load_missing_directory(tmp_path):
    """A missing source directory fails with an IO error."""
    with pytest.raises(ContentIOError) as exc:
        load(tmp_path / "missing")
    assert isinstance(exc.value, OSError)


def test_duplicate_slug_names_both_files(write_doc, content_dir):
    """Two files that normalize to the same slug fail the load, naming both sources."""
    write_doc("My Post.md", title="My Post")
    write_doc("my-post.mdx", title="My Post")
    with pytest.raises(LoadError) as exc:
        load(content_dir)
    errors = exc.value.errors
    assert len(errors) == 1
    assert isinstance(errors[0], DuplicateSlugError)
    assert errors[0].slug == "my-post"
    assert errors[0].paths == ("My Post.md", "my-post.mdx")


def test_missing_summary_fails(write_doc, content_dir):
    write_doc("no-summary.mdx", summary=None)
    with pytest.raises(LoadError) as exc:
        load(content_dir)
    [err] = exc.value.errors
    assert isinstance(err, SchemaError)
    assert (err.slug, err.field) == ("no-summary", "summary")


def test_updated_before_published_fails(write_doc, content_dir):
    write_doc("stale.mdx", publishedAt="2021-02-08", updatedAt="2021-01-01")
    with pytest.raises(LoadError) as exc:
        load(content_dir)
    assert [e.field for e in exc.value.errors] == ["updatedAt"]


def test_all_errors_reported_together(write_doc, content_dir):
    """Every broken file is reported in one LoadError; no partial collection is returned."""
    write_doc("good.mdx")
    write_doc("bad-date.mdx", publishedAt="someday")
    write_doc("no-title.mdx", title=None)
    (content_dir / "no-header.md").write_text("# Just a body\n")
    with pytest.raises(LoadError) as exc:
        load(content_dir)
    found = {(e.slug, e.field) for e in exc.value.errors}
    assert found == {
        ("bad-date", "publishedAt"),
        ("no-title", "title"),
        ("no-header", "frontmatter"),
    }
    report = str(exc.value)
    assert report.startswith("3 error(s) loading")
    assert "bad-date.mdx: publishedAt:" in report


def test_invalid_file_still_counts_for_duplicates(write_doc, content_dir):
    write_doc("post.md")
    write_doc("Post.mdx", summary=None)
    with pytest.raises(LoadError) as exc:
        load(content_dir)
    kinds = sorted(type(e).__name__ for e in exc.value.errors)
    assert kinds == ["DuplicateSlugError", "SchemaError"]


def test_non_document_files_ignored(write_doc, content_dir):
    write_doc("post.mdx")
    (content_dir / "cover.png").write_bytes(b"\x89PNG")
    (content_dir / "README.txt").write_text("notes")
    assert [d.slug for d in load(content_dir).all()] == ["post"]


def test_load_flat_ignores_subdirectories(write_doc, content_dir):
    write_doc("top.mdx")
    write_doc("guides/nested.mdx")
    assert [d.slug for d in load(content_dir).all()] == ["top"]


def test_load_recursive_nested_slugs(write_doc, content_dir):
    write_doc("top.mdx", publishedAt="2021-02-08")
    write_doc("Guides/Nested Post.mdx")
    collection = load(content_dir, recursive=True)
    assert [d.slug for d in collection.all()] == ["top", "guides/nested-post"]
    assert collection.by_slug("guides/nested-post").path == "Guides/Nested Post.mdx"


def test_load_is_deterministic(write_doc, content_dir):
    """Repeated loads of unchanged sources give identical ordering and fingerprint."""
    for i, day in enumerate(["2021-01-22", "2021-02-08", "2021-02-08", "2021-12-18"]):
        write_doc(f"post-{i}.mdx", publishedAt=day, tags=["css"] if i % 2 else [])
    first, second = load(content_dir), load(content_dir)
    assert first == second
    assert first.fingerprint() == second.fingerprint()
    assert [d.slug for d in first.all()] == ["post-3", "post-1", "post-2", "post-0"]


def test_load_with_workers_matches_sequential(write_doc, content_dir):
    for i in range(8):
        write_doc(f"post-{i}.mdx", publishedAt=f"2021-0{i % 3 + 1}-1{i}")
    assert load(content_dir, workers=4) == load(content_dir)


def test_load_never_writes(write_doc, content_dir):
    path = write_doc("post.mdx")
    before = path.read_bytes()
    load(content_dir)
    assert path.read_bytes() == before
    assert sorted(p.name for p in content_dir.iterdir()) == ["post.mdx"]


def test_load_draft_flag(write_doc, content_dir):
    write_doc("wip.mdx", draft=True)
    write_doc("done.mdx", draft=False, publishedAt="2021-02-08")
    write_doc("plain.mdx", publishedAt="2021-03-01")
    collection = load(content_dir)
    assert collection.by_slug("wip").draft is True
    assert collection.by_slug("done").draft is False
    assert collection.by_slug("plain").draft is None


def test_load_extensions_without_leading_dot(write_doc, content_dir):
    """Extensions given as 'md' match the same files as '.md'."""
    write_doc("post.md")
    write_doc("other.mdx", publishedAt="2021-02-08")
    assert [d.slug for d in load(content_dir, extensions=["md"]).all()] == ["post"]
