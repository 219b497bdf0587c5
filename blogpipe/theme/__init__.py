"""Browser scripts and starter styles for the blog theme."""

from .scaffold import ScaffoldReport, init_project
from .scripts import render_scripts
from .styles import STARTER_SASS

__all__ = [
    "init_project",
    "ScaffoldReport",
    "render_scripts",
    "STARTER_SASS",
]
