"""Project scaffolding: theme scripts, starter stylesheet, project file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import CONFIG_FILENAME
from ..settings import PipelineConfig, dump_config
from .scripts import render_scripts
from .styles import STARTER_SASS

logger = logging.getLogger(__name__)


@dataclass
class ScaffoldReport:
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def init_project(root: Path, config: PipelineConfig | None = None, force: bool = False) -> ScaffoldReport:
    """Write the theme sources and a project file into `root`.

    Existing files are left alone unless `force` is set.
    """
    root = root.resolve()
    config = (config or PipelineConfig()).model_copy(update={"root": root})

    files: dict[Path, str] = {}
    js_dir = root / "src" / "js"
    for name, source in render_scripts(config.theme).items():
        files[js_dir / name] = source
    files[config.path(config.sass_entry)] = STARTER_SASS.lstrip("\n")
    files[root / CONFIG_FILENAME] = dump_config(config)

    report = ScaffoldReport()
    for path, content in files.items():
        if path.exists() and not force:
            logger.debug("Keeping existing %s", path)
            report.skipped.append(path)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        report.written.append(path)

    (root / "src" / "img").mkdir(parents=True, exist_ok=True)
    return report
