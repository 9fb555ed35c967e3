"""Application configuration: settings schema and mdsite.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "mdsite.yaml"


class Settings(BaseModel):
    app_name:       str = "mdsite"
    content_dir:    str = Field(default="content", description="Directory of Markdown posts")
    output_dir:     str = Field(default="dist",    description="Directory for rendered HTML + JSON")
    include_drafts: bool = Field(default=False,    description="Publish posts marked draft: true")
    clean:          bool = Field(default=False,    description="Remove output_dir before writing")
    parser_config:  str = Field(
        default="gfm-like",
        pattern="^(commonmark|default|zero|js-default|gfm-like)$",
        description="MarkdownIt parser preset name",
    )
    site_title:     str = "Blog"
    language:       str = "en"
    date_format:    str = Field(default="%Y-%m-%d", description="strftime format for displayed dates")
    templates_dir:  Optional[str] = Field(default=None, description="Directory of template overrides")
    jobs:           int = Field(default=1, ge=1, description="Parallel file reads while loading")
    log_level:      str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdsite.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
