"""Polling file watcher.

Files are compared by modification time between polls, so no OS-specific
notification backend is needed.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..globs import glob_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchRule:
    patterns: tuple[str, ...]
    tasks: tuple[str, ...]

    @classmethod
    def of(cls, patterns: Iterable[str], tasks: Iterable[str]) -> "WatchRule":
        return cls(patterns=tuple(patterns), tasks=tuple(tasks))


@dataclass
class Watcher:
    """Maps changed files to the tasks that should re-run.

    Changes are held back until the tree has been quiet for `debounce`
    seconds; every new change restarts that period.
    """

    root: Path
    rules: list[WatchRule]
    debounce: float = 0.3
    clock: Callable[[], float] = time.monotonic
    _snapshots: list[dict[str, float]] = field(default_factory=list, init=False)
    _pending: set[int] = field(default_factory=set, init=False)
    _last_change: float | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._snapshots = [self._snapshot(rule) for rule in self.rules]

    def _snapshot(self, rule: WatchRule) -> dict[str, float]:
        snap: dict[str, float] = {}
        for p in glob_files(self.root, rule.patterns):
            try:
                snap[p.relative_to(self.root).as_posix()] = p.stat().st_mtime
            except FileNotFoundError:
                # Removed between glob and stat.
                continue
        return snap

    def poll(self) -> list[str]:
        """Check for changes; return tasks due to run (empty while debouncing)."""
        now = self.clock()
        for i, rule in enumerate(self.rules):
            current = self._snapshot(rule)
            if current != self._snapshots[i]:
                changed = _diff(self._snapshots[i], current)
                logger.debug("Changed: %s -> %s", ", ".join(changed), ", ".join(rule.tasks))
                self._snapshots[i] = current
                self._pending.add(i)
                self._last_change = now

        if not self._pending or self._last_change is None:
            return []
        if now - self._last_change < self.debounce:
            return []

        tasks: list[str] = []
        for i in sorted(self._pending):
            for name in self.rules[i].tasks:
                if name not in tasks:
                    tasks.append(name)
        self._pending.clear()
        self._last_change = None
        return tasks

    def run(
        self,
        callback: Callable[[list[str]], object],
        interval: float = 0.5,
        stop: threading.Event | None = None,
    ) -> None:
        """Poll every `interval` seconds and hand due tasks to `callback`.

        A failing callback is logged and watching continues. Returns when
        `stop` is set.
        """
        stop = stop or threading.Event()
        logger.info("Watching %d rule(s) under %s", len(self.rules), self.root)
        while not stop.is_set():
            tasks = self.poll()
            if tasks:
                try:
                    callback(tasks)
                except Exception:
                    logger.exception("Re-running %s failed", ", ".join(tasks))
            stop.wait(interval)


def _diff(before: dict[str, float], after: dict[str, float]) -> list[str]:
    changed = [k for k, v in after.items() if before.get(k) != v]
    changed.extend(k for k in before if k not in after)
    return sorted(changed)
