"""Root test configuration: content-directory fixtures and logging reset"""

from pathlib import Path

import pytest
import structlog
import yaml


BASE_FRONTMATTER = {
    "title": "A Post",
    "publishedAt": "2021-01-22",
    "summary": "A short summary.",
}


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any structlog configuration a CLI test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path) -> Path:
    d = tmp_path / "content"
    d.mkdir()
    return d


@pytest.fixture(name="write_doc")
def write_doc_fixture(content_dir):
    """Write a document with default front matter; keyword args override keys, None drops a key."""
    def _write(name: str, body: str = "Body text.\n", **fields) -> Path:
        fm = {**BASE_FRONTMATTER, **fields}
        fm = {k: v for k, v in fm.items() if v is not None}
        header = yaml.safe_dump(fm, sort_keys=False, allow_unicode=True)
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
        return path
    return _write
