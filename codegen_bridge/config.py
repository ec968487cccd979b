"""Bridge configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

SETTINGS_FILENAME = "codegen-bridge.yaml"

DEFAULT_EXTENSIONS = ["ts", "tsx", "js", "jsx", "rs", "py", "go", "java", "cpp", "c", "h"]

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert software developer. Generate complete, production-ready "
    "code following best practices. Return ONLY the code implementation without "
    "asking for permissions or confirmations. Generate all necessary files and "
    "code directly."
)


class BridgeSettings(BaseModel):
    """Settings shared by the collector and the providers."""

    source_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    claude_search_paths: list[str] = Field(
        default_factory=lambda: ["~/.local/bin/claude", "/usr/local/bin/claude"]
    )
    claude_model: str = "sonnet"
    claude_system_prompt: str = DEFAULT_SYSTEM_PROMPT
    timeout: float | None = Field(default=None, gt=0)
    verbose: bool = False

    @field_validator("source_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower().lstrip(".")
            if ext and ext not in normalized:
                normalized.append(ext)
        if not normalized:
            raise ValueError("source_extensions must name at least one extension")
        return normalized


def load_settings_file(path: str | Path) -> BridgeSettings:
    """Load and validate settings from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    return BridgeSettings(**data)


def load_settings(base_dir: str | Path | None = None) -> BridgeSettings:
    """Load the bridge's settings from ``base_dir``, or return defaults."""
    if base_dir is None:
        base_dir = Path.cwd()

    config_path = Path(base_dir) / SETTINGS_FILENAME
    if config_path.exists():
        return load_settings_file(config_path)

    return BridgeSettings()
