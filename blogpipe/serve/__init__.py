"""Dev server, live reload and file watching."""

from .reload import ReloadHub, ReloadState, client_script, inject_client
from .server import LiveReloadServer
from .watch import Watcher, WatchRule

__all__ = [
    "ReloadHub",
    "ReloadState",
    "client_script",
    "inject_client",
    "LiveReloadServer",
    "Watcher",
    "WatchRule",
]
