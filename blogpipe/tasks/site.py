"""Static-site generator invocation."""

from __future__ import annotations

import logging
import shlex
import subprocess

from ..serve.reload import ReloadHub
from ..settings import PipelineConfig
from .runner import TaskError, TaskResult

logger = logging.getLogger(__name__)

TASK = "site"


def run_generator(config: PipelineConfig, hub: ReloadHub | None = None) -> TaskResult:
    """Run the generator command in the project root with inherited stdio.

    Raises:
        TaskError: If the command is missing or exits non-zero
    """
    if hub is not None:
        hub.notify(config.site_notify)

    cmd = list(config.site_command)
    if not cmd:
        raise TaskError(TASK, "site_command is empty")

    logger.info("Running: $ %s", shlex.join(cmd))
    try:
        proc = subprocess.run(cmd, cwd=config.root, check=False)
    except FileNotFoundError as e:
        raise TaskError(TASK, f"Command not found: {cmd[0]}") from e

    if proc.returncode != 0:
        raise TaskError(
            TASK,
            f"{shlex.join(cmd)} exited with status {proc.returncode}",
            returncode=proc.returncode,
        )
    return TaskResult(name=TASK, outputs=[config.path(config.site_dir)])
