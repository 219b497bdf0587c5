"""Tests for the reload hub and the live-reload dev server."""

import json
import tempfile
import threading
import unittest
import urllib.request
from pathlib import Path

from blogpipe.serve.reload import ReloadHub, client_script, inject_client
from blogpipe.serve.server import LiveReloadServer

_opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))


def _get(url: str) -> tuple[int, str, str]:
    with _opener.open(url, timeout=5) as resp:
        return resp.status, resp.headers.get("Content-Type", ""), resp.read().decode("utf-8")


class TestReloadHub(unittest.TestCase):
    def test_versions_and_messages(self) -> None:
        hub = ReloadHub()
        self.assertEqual(hub.snapshot().version, 0)

        hub.reload(css_only=True)
        state = hub.snapshot()
        self.assertEqual(state.version, 1)
        self.assertTrue(state.css_only)

        hub.notify("Running: $ jekyll build")
        hub.reload()
        state = hub.snapshot()
        self.assertEqual(state.version, 2)
        self.assertFalse(state.css_only)
        self.assertEqual(state.message, "Running: $ jekyll build")
        self.assertEqual(state.message_id, 1)

    def test_css_reload_keeps_pending_full_reload(self) -> None:
        hub = ReloadHub()
        hub.reload()
        state = hub.reload(css_only=True)
        self.assertEqual(state.version, 2)
        self.assertTrue(state.css_only)
        self.assertEqual(state.full_version, 1)

        # A browser last seen at version 0 must do a full reload.
        self.assertGreater(state.full_version, 0)
        # One already at version 1 only swaps stylesheets.
        self.assertFalse(state.full_version > 1)

        self.assertEqual(hub.reload().full_version, 3)
        self.assertEqual(hub.notify("hi").full_version, 3)

    def test_client_reloads_on_full_version(self) -> None:
        js = client_script()
        self.assertIn("state.full_version > seen", js)
        self.assertLess(js.index("window.location.reload()"), js.index("refreshStyles(state.version)"))

    def test_concurrent_reloads_are_counted(self) -> None:
        hub = ReloadHub()
        threads = [threading.Thread(target=lambda: [hub.reload() for _ in range(100)]) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(hub.snapshot().version, 800)


class TestInjectClient(unittest.TestCase):
    def test_before_closing_body(self) -> None:
        html = inject_client("<html><BODY><p>x</p></BODY></html>")
        self.assertIn('<script src="/__blogpipe/client.js" async></script></BODY>', html)

    def test_appended_without_body(self) -> None:
        html = inject_client("<p>fragment</p>")
        self.assertTrue(html.startswith("<p>fragment</p><script"))

    def test_client_script_substitution(self) -> None:
        js = client_script(poll_ms=250)
        self.assertIn('"/__blogpipe/state"', js)
        self.assertIn("setTimeout(poll, 250)", js)
        self.assertIn('"$1"', js)


class TestLiveReloadServer(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        (self.root / "index.html").write_text(
            "<html><body><h1>Blog</h1></body></html>", encoding="utf-8"
        )
        (self.root / "posts").mkdir()
        (self.root / "posts" / "index.html").write_text("<p>post</p>", encoding="utf-8")
        (self.root / "main.css").write_text("body{color:red}", encoding="utf-8")
        self.hub = ReloadHub()
        self.server = LiveReloadServer(self.root, self.hub, host="127.0.0.1", port=0)
        self.server.start()

    def tearDown(self) -> None:
        self.server.stop()
        self._td.cleanup()

    def test_html_gets_client(self) -> None:
        status, ctype, body = _get(self.server.url)
        self.assertEqual(status, 200)
        self.assertTrue(ctype.startswith("text/html"))
        self.assertIn("<h1>Blog</h1>", body)
        self.assertIn("/__blogpipe/client.js", body)

        _, _, body = _get(self.server.url + "posts/")
        self.assertIn("<p>post</p><script", body)

    def test_static_files_untouched(self) -> None:
        _, _, body = _get(self.server.url + "main.css")
        self.assertEqual(body, "body{color:red}")

    def test_state_endpoint_tracks_hub(self) -> None:
        _, ctype, body = _get(self.server.url + "__blogpipe/state")
        self.assertEqual(ctype, "application/json")
        self.assertEqual(json.loads(body)["version"], 0)

        self.hub.reload(css_only=True)
        state = json.loads(_get(self.server.url + "__blogpipe/state")[2])
        self.assertEqual(state["version"], 1)
        self.assertTrue(state["css_only"])

    def test_client_endpoint(self) -> None:
        _, ctype, body = _get(self.server.url + "__blogpipe/client.js")
        self.assertEqual(ctype, "application/javascript")
        self.assertIn("XMLHttpRequest", body)

    def test_head_matches_get_length(self) -> None:
        _, _, body = _get(self.server.url)
        req = urllib.request.Request(self.server.url, method="HEAD")
        with _opener.open(req, timeout=5) as resp:
            self.assertEqual(resp.status, 200)
            self.assertEqual(int(resp.headers["Content-Length"]), len(body.encode("utf-8")))
            self.assertEqual(resp.read(), b"")

        req = urllib.request.Request(self.server.url + "__blogpipe/state", method="HEAD")
        with _opener.open(req, timeout=5) as resp:
            self.assertEqual(resp.headers["Content-Type"], "application/json")

        req = urllib.request.Request(self.server.url + "main.css", method="HEAD")
        with _opener.open(req, timeout=5) as resp:
            self.assertEqual(int(resp.headers["Content-Length"]), len("body{color:red}"))

    def test_is_running_and_stop(self) -> None:
        self.assertTrue(self.server.is_running())
        self.assertNotEqual(self.server.address[1], 0)


if __name__ == "__main__":
    unittest.main()
