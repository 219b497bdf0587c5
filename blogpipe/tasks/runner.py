"""Named build tasks with dependencies."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Raised when a task cannot complete."""

    def __init__(self, task: str, message: str, returncode: int | None = None):
        super().__init__(message)
        self.task = task
        self.message = message
        self.returncode = returncode

    def __str__(self) -> str:
        return f"[{self.task}] {self.message}"


class TaskNotFound(TaskError):
    """Raised for a task name nobody registered."""

    def __init__(self, task: str):
        super().__init__(task, f"Unknown task: {task}")


class TaskResult(BaseModel):
    """Outcome of one task run."""

    name: str
    outputs: list[Path] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    duration_ms: float = 0.0


TaskFn = Callable[[], "TaskResult | None"]


@dataclass
class Task:
    name: str
    fn: TaskFn
    deps: tuple[str, ...] = ()
    description: str = ""


@dataclass
class TaskRunner:
    """Registry and executor for build tasks.

    Each `run()` call executes every requested task and its dependencies at
    most once, dependencies first, in declaration order.
    """

    tasks: dict[str, Task] = field(default_factory=dict)

    def task(
        self, name: str, deps: Iterable[str] = (), description: str = ""
    ) -> Callable[[TaskFn], TaskFn]:
        """Decorator registering `fn` as task `name`."""

        def register(fn: TaskFn) -> TaskFn:
            self.add(name, fn, deps=deps, description=description)
            return fn

        return register

    def add(self, name: str, fn: TaskFn, deps: Iterable[str] = (), description: str = "") -> None:
        self.tasks[name] = Task(name=name, fn=fn, deps=tuple(deps), description=description)

    def names(self) -> list[tuple[str, str]]:
        """(name, description) for every task, sorted by name."""
        return [(t.name, t.description) for t in sorted(self.tasks.values(), key=lambda t: t.name)]

    def plan(self, names: Iterable[str]) -> list[str]:
        """Execution order for `names` including dependencies."""
        order: list[str] = []
        visiting: list[str] = []

        def visit(name: str) -> None:
            if name in order:
                return
            if name in visiting:
                cycle = " -> ".join([*visiting[visiting.index(name) :], name])
                raise TaskError(name, f"Dependency cycle: {cycle}")
            task = self.tasks.get(name)
            if task is None:
                raise TaskNotFound(name)
            visiting.append(name)
            for dep in task.deps:
                visit(dep)
            visiting.pop()
            order.append(name)

        for name in names:
            visit(name)
        return order

    def run(self, *names: str) -> list[TaskResult]:
        """Run tasks (and their dependencies) in order.

        Raises:
            TaskNotFound: If a name is not registered
            TaskError: If a task fails; other exceptions are wrapped
        """
        results: list[TaskResult] = []
        for name in self.plan(names):
            results.append(self._run_one(self.tasks[name]))
        return results

    def _run_one(self, task: Task) -> TaskResult:
        logger.info("Starting '%s'...", task.name)
        started = time.perf_counter()
        try:
            result = task.fn()
        except TaskError:
            logger.error("'%s' errored", task.name)
            raise
        except Exception as e:
            logger.error("'%s' errored", task.name)
            raise TaskError(task.name, str(e) or type(e).__name__) from e

        elapsed = (time.perf_counter() - started) * 1000.0
        if result is None:
            result = TaskResult(name=task.name)
        result.duration_ms = elapsed
        for w in result.warnings:
            logger.warning("%s: %s", task.name, w)
        logger.info("Finished '%s' after %.0f ms", task.name, elapsed)
        return result
