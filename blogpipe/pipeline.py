"""The task graph wiring the build steps, dev server and watcher together."""

from __future__ import annotations

import logging
import threading

from .serve.reload import ReloadHub
from .serve.server import LiveReloadServer
from .serve.watch import Watcher, WatchRule
from .settings import PipelineConfig
from .tasks.images import optimize_images
from .tasks.runner import TaskResult, TaskRunner
from .tasks.scripts import bundle_scripts
from .tasks.site import run_generator
from .tasks.styles import compile_styles

logger = logging.getLogger(__name__)

DEFAULT_TASK = "default"


class Pipeline:
    """Registers the build tasks for one project.

    Task graph:
        styles, scripts, images, site      standalone steps
        rebuild  <- site                   regenerate, then reload browsers
        serve    <- site                   start the live-reload server
        build    <- scripts, styles, images, site
        default  <- scripts, styles, serve, watch
    """

    def __init__(self, config: PipelineConfig, hub: ReloadHub | None = None):
        self.config = config
        self.hub = hub or ReloadHub()
        self.server: LiveReloadServer | None = None
        self.stop_event = threading.Event()
        self.runner = TaskRunner()
        self._register()

    def _register(self) -> None:
        r = self.runner
        r.add("styles", self.styles, description="Compile Sass into CSS")
        r.add("scripts", self.scripts, description="Concatenate and minify scripts")
        r.add("images", self.images, description="Optimize images")
        r.add("site", self.site, description="Run the static-site generator")
        r.add("rebuild", self.rebuild, deps=["site"], description="Regenerate the site and reload browsers")
        r.add("serve", self.serve, deps=["site"], description="Serve the site with live reload")
        r.add("watch", self.watch, description="Re-run tasks when sources change")
        r.add(
            "build",
            lambda: TaskResult(name="build"),
            deps=["scripts", "styles", "images", "site"],
            description="Build all assets and the site once",
        )
        r.add(
            DEFAULT_TASK,
            lambda: TaskResult(name=DEFAULT_TASK),
            deps=["scripts", "styles", "serve", "watch"],
            description="Build assets, serve, and watch",
        )

    def run(self, *names: str) -> list[TaskResult]:
        return self.runner.run(*(names or (DEFAULT_TASK,)))

    def styles(self) -> TaskResult:
        result = compile_styles(self.config)
        self.hub.reload(css_only=True)
        return result

    def scripts(self) -> TaskResult:
        result = bundle_scripts(self.config)
        if result.outputs:
            self.hub.reload()
        return result

    def images(self) -> TaskResult:
        return optimize_images(self.config)

    def site(self) -> TaskResult:
        return run_generator(self.config, self.hub)

    def rebuild(self) -> TaskResult:
        self.hub.reload()
        return TaskResult(name="rebuild")

    def serve(self) -> TaskResult:
        if self.server is None:
            root = self.config.path(self.config.site_dir)
            root.mkdir(parents=True, exist_ok=True)
            self.server = LiveReloadServer(
                root, self.hub, host=self.config.host, port=self.config.port
            )
            self.server.start()
        return TaskResult(name="serve", outputs=[self.server.root])

    def watch_rules(self) -> list[WatchRule]:
        c = self.config
        return [
            WatchRule.of(c.sass_watch, ["styles"]),
            WatchRule.of(c.js_sources, ["scripts"]),
            WatchRule.of(c.image_sources, ["images"]),
            WatchRule.of(c.site_watch, ["rebuild"]),
        ]

    def watcher(self) -> Watcher:
        return Watcher(self.config.root, self.watch_rules(), debounce=self.config.watch_debounce)

    def watch(self) -> TaskResult:
        """Block, re-running tasks on change, until `close()` is called."""
        self.watcher().run(
            lambda tasks: self.runner.run(*tasks),
            interval=self.config.watch_interval,
            stop=self.stop_event,
        )
        return TaskResult(name="watch")

    def wait(self) -> None:
        """Keep serving until the server stops (or the process is interrupted)."""
        if self.server is not None:
            self.server.wait()

    def close(self) -> None:
        logger.debug("Shutting down")
        self.stop_event.set()
        if self.server is not None:
            self.server.stop()
            self.server = None
