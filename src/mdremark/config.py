"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field

from mdremark.core.frontmatter import FrontmatterOptions


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDREMARK_"


class PluginSpec(BaseModel):
    """One configured transform step: registry name plus its options."""
    name:    str
    options: dict[str, Any] = {}


class Settings(BaseModel):
    app_name:      str = "mdremark"
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    frontmatter:   FrontmatterOptions = Field(default_factory=FrontmatterOptions)
    external_links_target: Optional[str] = Field(default="_blank", description="target for external links; empty omits")
    external_links_rel:    Union[str, list[str], None] = Field(
        default=["nofollow", "noopener", "noreferrer"], description="rel for external links; empty omits")
    anchor_class_name: Union[str, list[str]] = Field(default="icon icon-link", description="class of heading self-link icons")
    plugins:    Optional[list[PluginSpec]] = Field(default=None, description="Explicit transform chain; None = default order")
    output_dir: str = Field(default="dist", description="Directory for rendered HTML + JSON files")
    workers:    int = Field(default=4, ge=1, description="Parallel documents rendered by the CLI")
    log_level:  str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDREMARK_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
