"""Development HTTP server with live reload.

Built on the standard library HTTP server: files are served from the
generated site directory and HTML pages get the reload client injected.
"""

from __future__ import annotations

import json
import logging
import threading
from functools import partial
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import urlsplit

from ..config import RELOAD_POLL_MS, RELOAD_PREFIX
from .reload import ReloadHub, client_script, inject_client

logger = logging.getLogger(__name__)


class LiveReloadHandler(SimpleHTTPRequestHandler):
    hub: ReloadHub
    poll_ms: int = RELOAD_POLL_MS

    def __init__(self, *args, hub: ReloadHub, poll_ms: int = RELOAD_POLL_MS, **kwargs):
        self.hub = hub
        self.poll_ms = poll_ms
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:
        self._respond(head_only=False)

    def do_HEAD(self) -> None:
        self._respond(head_only=True)

    def _respond(self, head_only: bool) -> None:
        path = urlsplit(self.path).path
        if path == f"{RELOAD_PREFIX}/state":
            body = json.dumps(self.hub.snapshot().to_dict()).encode("utf-8")
            self._send(body, "application/json", head_only)
            return
        if path == f"{RELOAD_PREFIX}/client.js":
            body = client_script(self.poll_ms).encode("utf-8")
            self._send(body, "application/javascript", head_only)
            return

        html_path = self._html_path()
        if html_path is None:
            if head_only:
                super().do_HEAD()
            else:
                super().do_GET()
            return

        try:
            html = html_path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            self.send_error(HTTPStatus.NOT_FOUND, "File not found")
            return
        self._send(inject_client(html).encode("utf-8"), "text/html; charset=utf-8", head_only)

    def _html_path(self) -> Path | None:
        fs_path = Path(self.translate_path(self.path))
        if fs_path.is_dir():
            if not urlsplit(self.path).path.endswith("/"):
                # Let the base handler issue its trailing-slash redirect.
                return None
            fs_path = fs_path / "index.html"
        if fs_path.suffix.lower() in (".html", ".htm") and fs_path.is_file():
            return fs_path
        return None

    def _send(self, body: bytes, content_type: str, head_only: bool = False) -> None:
        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        if not head_only:
            self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:  # noqa: A002 - stdlib signature
        logger.debug("%s - %s", self.address_string(), format % args)


class LiveReloadServer:
    """Serve `root` on a background thread until `stop()`."""

    def __init__(
        self,
        root: Path,
        hub: ReloadHub,
        host: str = "127.0.0.1",
        port: int = 3000,
        poll_ms: int = RELOAD_POLL_MS,
    ):
        self.root = root
        self.hub = hub
        handler = partial(LiveReloadHandler, hub=hub, poll_ms=poll_ms, directory=str(root))
        self._httpd = ThreadingHTTPServer((host, port), handler)
        self._httpd.daemon_threads = True
        self._thread: threading.Thread | None = None

    @property
    def address(self) -> tuple[str, int]:
        host, port = self._httpd.server_address[:2]
        return str(host), int(port)

    @property
    def url(self) -> str:
        host, port = self.address
        return f"http://{host}:{port}/"

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._httpd.serve_forever, name="blogpipe-server", daemon=True
        )
        self._thread.start()
        logger.info("Serving %s at %s", self.root, self.url)

    def stop(self) -> None:
        if self._thread is not None:
            self._httpd.shutdown()
            self._thread.join()
            self._thread = None
        self._httpd.server_close()

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait(self) -> None:
        """Block until the server thread exits."""
        thread = self._thread
        while thread is not None and thread.is_alive():
            thread.join(0.5)
