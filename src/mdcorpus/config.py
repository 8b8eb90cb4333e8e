"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:    str = "mdcorpus"
    content_dir: str = Field(default="content", description="Directory holding the .md/.mdx documents")
    recursive:   bool = Field(default=False, description="Descend into nested category directories")
    extensions:  list[str] = Field(default=[".md", ".mdx"], description="Document file suffixes")
    workers:     int = Field(default=1, ge=1, description="Parser threads; 1 parses sequentially")
    output_dir:  str = Field(default="dist", description="Directory for exported JSON index files")
    link_prefix: str = Field(default="/blog/", description="URL prefix of internal article links")
    log_level:   str = Field(
        default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", description="structlog level",
    )

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, v: Any) -> Any:
        """Accept a comma-separated string (env vars) and normalize to '.ext' form."""
        if isinstance(v, str):
            v = [e for e in (s.strip() for s in v.split(",")) if e]
        if isinstance(v, list):
            v = [e if str(e).startswith(".") else f".{e}" for e in v]
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDCORPUS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDCORPUS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
