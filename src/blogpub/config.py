"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BLOGPUB_"


class Settings(BaseModel):
    blog_root:        str = Field(default=".",                description="Blog repository root holding posts/")
    encoding:         str = Field(default="utf-8",            description="Text encoding for post files and the index")
    index_file:       str = Field(default="posts/index.json", description="Posts index path, relative to blog_root")
    site_name:        str = Field(default="Dev Log",          description="Title suffix and og:site_name")
    site_url:         str = Field(default="https://example.github.io", description="Canonical URL base, no trailing slash")
    author:           str = "admin"
    lang:             str = "ko"
    locale:           str = "ko_KR"
    default_keywords: str = Field(default="programming, web, dev blog", description="Keywords for posts without tags")
    templates_dir:    Optional[str] = Field(default=None,     description="Directory overriding the bundled page templates")

    @property
    def root(self) -> Path:
        return Path(self.blog_root)

    @property
    def index_path(self) -> Path:
        return self.root / self.index_file


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
