"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    src_dir:        str = Field(default="_posts",   description="Directory holding YYYY-MM-DD-slug.md posts")
    output_dir:     str = Field(default="_site",    description="Directory for rendered HTML output")
    strict:         bool = Field(default=False,     description="Fail posts whose layout has no template")
    default_layout: str = Field(default="default",  description="Layout used when a post names none or an unknown one")
    templates_dir:  Optional[str] = Field(default=None, description="Extra template directory searched before built-ins")
    parser_config:  str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    post_separator: str = Field(default="<!--split-->", min_length=1, description="Line marking two posts joined in one file")
    extensions:     list[str] = Field(default=[".md", ".markdown"], description="Post file suffixes")
    site_title:     str = "Blog"

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: Any) -> Any:
        """Accept a comma-separated string (env vars) and normalise to dotted lower-case suffixes."""
        if isinstance(value, str):
            value = [v for v in value.split(",") if v.strip()]
        if isinstance(value, list):
            return ["." + str(v).strip().lstrip(".").lower() for v in value]
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
