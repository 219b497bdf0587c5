"""Sass compilation."""

from __future__ import annotations

import logging

import sass

from ..settings import PipelineConfig
from .runner import TaskError, TaskResult

logger = logging.getLogger(__name__)

TASK = "styles"


def compile_styles(config: PipelineConfig) -> TaskResult:
    """Compile the Sass entry file into every CSS destination.

    `.sass` entries are read with the indented syntax, `.scss` with braces;
    libsass picks the syntax from the extension.

    Raises:
        TaskError: If the entry file is missing or fails to compile
    """
    entry = config.path(config.sass_entry)
    if not entry.is_file():
        raise TaskError(TASK, f"Sass entry not found: {entry}")

    include_paths = [str(config.path(p)) for p in config.sass_include_paths]
    try:
        css = sass.compile(
            filename=str(entry),
            output_style=config.css_output_style,
            include_paths=include_paths,
        )
    except sass.CompileError as e:
        raise TaskError(TASK, str(e)) from e

    name = entry.with_suffix(".css").name
    result = TaskResult(name=TASK)
    for dest in config.css_dests:
        out = config.path(dest) / name
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(css, encoding="utf-8")
        logger.debug("Wrote %s (%d bytes)", out, len(css))
        result.outputs.append(out)
    return result
