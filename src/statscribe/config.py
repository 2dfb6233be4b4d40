"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:        str  = "statscribe"
    min_block_chars: int  = Field(default=10, ge=1, description="Blocks shorter than this are discarded as noise")
    lookahead_lines: int  = Field(default=3,  ge=1, description="Lines scanned after a title for a genre signature")
    min_block_lines: int  = Field(default=3,  ge=0, description="Lines a block must hold before a title may split it")
    dedupe_blocks:   bool = Field(default=True,     description="Drop repeated identical blocks within a document")
    output_dir:      str  = Field(default="dist",   description="Directory for exported record files")
    output_format:   str  = Field(default="json", pattern="^(json|yaml)$", description="json or yaml")
    log_level:       str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_json:        bool = Field(default=False,    description="Render log entries as JSON lines")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then STATSCRIBE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"STATSCRIBE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def default_config_yaml() -> str:
    """Render the default Settings as a config.yaml body."""
    return yaml.safe_dump(Settings().model_dump(), sort_keys=False)
