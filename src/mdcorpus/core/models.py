"""Data models for parsed files and validated documents"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


@dataclass
class ParsedDoc:
    """Internal parse result: front matter split from body, not yet validated."""
    path:         Path             # relative to the content root
    slug:         str
    raw_markdown: str              # full file content (includes front matter)
    markdown:     str              # body only (front matter stripped)
    hash:         str
    frontmatter:  dict[str, Any]


class Document(BaseModel):
    """A validated article. Instances are frozen; tags are a deduplicated tuple."""
    model_config = ConfigDict(frozen=True)

    slug:         str
    path:         str
    title:        str
    published_at: date
    updated_at:   Optional[date] = None
    summary:      str
    tags:         tuple[str, ...] = ()
    image:        Optional[str] = None
    draft:        Optional[bool] = None
    body:         str = ""
    hash:         str = ""

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags
