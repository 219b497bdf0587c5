"""Build tasks and the task runner."""

from .images import optimize_images
from .runner import TaskError, TaskNotFound, TaskResult, TaskRunner
from .scripts import bundle_scripts
from .site import run_generator
from .styles import compile_styles

__all__ = [
    "TaskRunner",
    "TaskResult",
    "TaskError",
    "TaskNotFound",
    "compile_styles",
    "bundle_scripts",
    "optimize_images",
    "run_generator",
]
