"""Project configuration model and loader."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from .config import (
    CONFIG_FILENAME,
    DEFAULT_HOST,
    DEFAULT_PORT,
    HOST_ENV,
    OPTIMIZATION_LEVEL,
    PORT_ENV,
    SITE_COMMAND,
    SITE_DIR,
    WATCH_DEBOUNCE,
    WATCH_INTERVAL,
)


class ConfigError(Exception):
    """Raised when the project file cannot be read or validated."""


class ThemeOptions(BaseModel):
    """Values substituted into the browser scripts."""

    model_config = {"extra": "forbid"}

    # Column equalizer
    equalize_container: str = "recent"
    equalize_tags: list[str] = Field(default_factory=lambda: ["h2", "p"])

    # Collapsible navigation
    nav_toggle: str = ".navbar-toggle"
    nav_collapse: str = ".collapse"

    # Header shrink on scroll
    header_selector: str = "header"
    header_class: str = "header-shrink"
    scroll_threshold: int = Field(default=50, ge=0)
    debounce_ms: int = Field(default=250, ge=0)

    # Sidebar menu and search overlay
    sidebar_class: str = "slide"
    search_json: str = "/search.json"

    # Pageview beacon, omitted when unset
    analytics_id: str | None = None


class PipelineConfig(BaseModel):
    """Every path, glob and command the tasks use, relative to the project root."""

    model_config = {"extra": "forbid"}

    root: Path = Path(".")
    site_dir: str = SITE_DIR
    site_command: list[str] = Field(default_factory=lambda: list(SITE_COMMAND))
    site_notify: str = "Running: $ jekyll build"
    site_watch: list[str] = Field(
        default_factory=lambda: [
            "*.html",
            "_includes/*.html",
            "_layouts/*.html",
            "_posts/*",
            "_config.yml",
        ]
    )

    sass_entry: str = "src/sass/main.sass"
    sass_watch: list[str] = Field(default_factory=lambda: ["src/sass/*.sass"])
    sass_include_paths: list[str] = Field(default_factory=lambda: ["src/sass"])
    css_output_style: Literal["nested", "expanded", "compact", "compressed"] = "nested"
    css_dests: list[str] = Field(default_factory=lambda: ["_site/assets/css", "assets/css"])

    js_sources: list[str] = Field(default_factory=lambda: ["src/js/**/*.js"])
    js_bundle: str = "main.js"
    js_dests: list[str] = Field(default_factory=lambda: ["assets/js", "_site/assets/js"])
    minify_js: bool = True

    image_sources: list[str] = Field(default_factory=lambda: ["src/img/**/*.{jpg,png,gif}"])
    image_dest: str = "assets/img"
    optimization_level: int = Field(default=OPTIMIZATION_LEVEL, ge=0, le=7)
    progressive: bool = True
    interlaced: bool = True

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    watch_interval: float = Field(default=WATCH_INTERVAL, gt=0)
    watch_debounce: float = Field(default=WATCH_DEBOUNCE, ge=0)

    theme: ThemeOptions = Field(default_factory=ThemeOptions)

    def path(self, rel: str) -> Path:
        """Resolve a project-relative path."""
        return self.root / rel


def load_config(root: Path, config_path: Path | None = None) -> PipelineConfig:
    """Load the project file from `root` (or `config_path`), falling back to defaults.

    Args:
        root: Project root; relative paths in the config resolve against it
        config_path: Explicit config file; must exist when given

    Returns:
        Validated PipelineConfig with `root` set

    Raises:
        ConfigError: If the file is unreadable, not JSON, or fails validation
            (including a BLOGPIPE_HOST / BLOGPIPE_PORT override)
    """
    root = root.resolve()
    path = config_path if config_path is not None else root / CONFIG_FILENAME

    data: dict = {}
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
    elif config_path is not None:
        raise ConfigError(f"Config file not found: {path}")

    data.pop("root", None)
    for key, env in (("host", HOST_ENV), ("port", PORT_ENV)):
        value = os.getenv(env)
        if value and key not in data:
            data[key] = value

    try:
        config = PipelineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}:\n{e}") from e
    return config.model_copy(update={"root": root})


def dump_config(config: PipelineConfig) -> str:
    """Serialize a config for the project file (without the machine-specific root)."""
    payload = config.model_dump(mode="json", exclude={"root"})
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
