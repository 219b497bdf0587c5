"""Script concatenation and minification."""

from __future__ import annotations

import logging

import rjsmin

from ..globs import glob_files
from ..settings import PipelineConfig
from .runner import TaskResult

logger = logging.getLogger(__name__)

TASK = "scripts"


def concat_sources(sources: list[str]) -> str:
    """Join script sources so a missing trailing semicolon never merges two files."""
    parts: list[str] = []
    for src in sources:
        src = src.rstrip()
        if src and not src.endswith(";"):
            src += ";"
        if src:
            parts.append(src)
    return "\n".join(parts) + "\n" if parts else ""


def bundle_scripts(config: PipelineConfig) -> TaskResult:
    """Concatenate the script sources (sorted by path), minify, write the bundle."""
    result = TaskResult(name=TASK)
    files = glob_files(config.root, config.js_sources)
    if not files:
        result.warnings.append(f"No scripts matched {', '.join(config.js_sources)}")
        return result

    logger.debug("Bundling %d scripts", len(files))
    bundle = concat_sources([f.read_text(encoding="utf-8") for f in files])
    if config.minify_js:
        bundle = rjsmin.jsmin(bundle)

    for dest in config.js_dests:
        out = config.path(dest) / config.js_bundle
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(bundle, encoding="utf-8")
        logger.debug("Wrote %s (%d bytes)", out, len(bundle))
        result.outputs.append(out)
    return result
