"""Reload state shared between the tasks and the dev server."""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from string import Template

from ..config import RELOAD_POLL_MS, RELOAD_PREFIX


@dataclass(frozen=True)
class ReloadState:
    version: int = 0
    # Last version that needs a full page reload.
    full_version: int = 0
    css_only: bool = False
    message: str | None = None
    message_id: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class ReloadHub:
    """Version counter browsers poll to know when to refresh.

    Tasks call `reload()` after writing outputs; the server hands out
    `snapshot()` to clients. Safe to use from any thread.
    """

    def __init__(self) -> None:
        self._state = ReloadState()
        self._lock = threading.Lock()

    def reload(self, css_only: bool = False) -> ReloadState:
        """Ask connected browsers to refresh (stylesheets only when `css_only`)."""
        with self._lock:
            version = self._state.version + 1
            self._state = ReloadState(
                version=version,
                full_version=self._state.full_version if css_only else version,
                css_only=css_only,
                message=self._state.message,
                message_id=self._state.message_id,
            )
            return self._state

    def notify(self, message: str) -> ReloadState:
        """Show a short message in connected browsers."""
        with self._lock:
            self._state = ReloadState(
                version=self._state.version,
                full_version=self._state.full_version,
                css_only=self._state.css_only,
                message=message,
                message_id=self._state.message_id + 1,
            )
            return self._state

    def snapshot(self) -> ReloadState:
        with self._lock:
            return self._state


_CLIENT_TEMPLATE = Template(
    r"""(function (window, document) {
  var endpoint = "$prefix/state";
  var seen = null;
  var seenMessage = null;

  function show(message) {
    var box = document.getElementById("__blogpipe-notify");
    if (!box) {
      box = document.createElement("div");
      box.id = "__blogpipe-notify";
      box.style.cssText = "position:fixed;top:0;right:0;z-index:9999;padding:10px 15px;" +
        "font:13px sans-serif;color:#fff;background:rgba(0,0,0,.75);";
      document.body.appendChild(box);
    }
    box.innerHTML = message;
    box.style.display = "block";
    clearTimeout(box.__timer);
    box.__timer = setTimeout(function () { box.style.display = "none"; }, 2000);
  }

  function refreshStyles(version) {
    var links = document.querySelectorAll('link[rel="stylesheet"]');
    for (var i = 0; i < links.length; i++) {
      var href = links[i].getAttribute("href");
      if (!href) { continue; }
      href = href.replace(/([?&])bp=\d+&?/, "$$1").replace(/[?&]$$/, "");
      links[i].setAttribute("href", href + (href.indexOf("?") === -1 ? "?" : "&") + "bp=" + version);
    }
  }

  function poll() {
    var xhr = new XMLHttpRequest();
    xhr.open("GET", endpoint, true);
    xhr.onload = function () {
      if (xhr.status === 200) {
        var state = JSON.parse(xhr.responseText);
        if (seenMessage !== null && state.message && state.message_id !== seenMessage) {
          show(state.message);
        }
        seenMessage = state.message_id;
        if (seen !== null && state.version !== seen) {
          if (state.full_version > seen) {
            window.location.reload();
            return;
          }
          refreshStyles(state.version);
        }
        seen = state.version;
      }
      setTimeout(poll, $poll_ms);
    };
    xhr.onerror = function () { setTimeout(poll, $poll_ms); };
    xhr.send();
  }

  poll();
})(window, document);
"""
)


def client_script(poll_ms: int = RELOAD_POLL_MS, prefix: str = RELOAD_PREFIX) -> str:
    """JavaScript injected into served pages."""
    return _CLIENT_TEMPLATE.substitute(prefix=prefix, poll_ms=int(poll_ms))


def inject_client(html: str, prefix: str = RELOAD_PREFIX) -> str:
    """Insert the client script tag before `</body>`, or append it."""
    tag = f'<script src="{prefix}/client.js" async></script>'
    idx = html.lower().rfind("</body>")
    if idx == -1:
        return html + tag
    return html[:idx] + tag + html[idx:]
