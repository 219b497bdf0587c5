"""Browser scripts shipped with the theme.

Each snippet is a self-invoking function using plain DOM APIs. Option values
are substituted as JSON literals; snippets bail out early when the elements
they drive are not on the page.
"""

from __future__ import annotations

import json
from string import Template

from ..settings import ThemeOptions

EQUALIZE_JS = Template(
    r"""// Equal-height columns: every matched element gets the tallest rendered height.
(function (window, document) {
  var containerId = $container;
  var tags = $tags;
  var delay = $debounce;

  function fix(node, tag) {
    var elements = node.getElementsByTagName(tag);
    var highest = 0;
    var i;
    for (i = 0; i < elements.length; i++) {
      elements[i].style.height = "";
    }
    for (i = 0; i < elements.length; i++) {
      if (!elements[i].offsetHeight) {
        continue;
      }
      if (elements[i].offsetHeight > highest) {
        highest = elements[i].offsetHeight;
      }
    }
    for (i = 0; i < elements.length; i++) {
      elements[i].style.height = parseInt(highest, 10) + "px";
    }
  }

  function init() {
    if (!document.getElementById || !document.createTextNode) {
      return;
    }
    var node = document.getElementById(containerId);
    if (!node) {
      return;
    }
    for (var i = 0; i < tags.length; i++) {
      fix(node, tags[i]);
    }
  }

  var timer = null;
  window.addEventListener("resize", function () {
    clearTimeout(timer);
    timer = setTimeout(init, delay);
  });
  window.addEventListener("load", init);
  init();
})(window, document);
"""
)

NAVTOGGLE_JS = Template(
    r"""// Collapsible navigation.
(function (document) {
  var toggle = document.querySelector($toggle);
  var collapsed = document.querySelector($collapse);
  if (!toggle || !collapsed) {
    return;
  }
  toggle.addEventListener("click", function () {
    collapsed.classList.toggle("collapse");
  });
})(document);
"""
)

HEADER_JS = Template(
    r"""// Shrink the header once the page is scrolled past the threshold.
(function (window, document) {
  var header = document.querySelector($header);
  if (!header) {
    return;
  }
  var threshold = $threshold;
  var className = $class_name;
  var delay = $debounce;
  var timer = null;

  function update() {
    var offset = window.pageYOffset || document.documentElement.scrollTop;
    if (offset > threshold) {
      header.classList.add(className);
    } else {
      header.classList.remove(className);
    }
  }

  window.addEventListener("scroll", function () {
    clearTimeout(timer);
    timer = setTimeout(update, delay);
  });
  update();
})(window, document);
"""
)

LINKS_JS = r"""// Open links to other hosts in a new browsing context.
(function (window, document) {
  var anchors = document.getElementsByTagName("a");
  for (var i = 0; i < anchors.length; i++) {
    var a = anchors[i];
    if (a.hostname !== window.location.hostname) {
      a.setAttribute("target", "_blank");
      a.setAttribute("rel", "noopener");
    }
  }
})(window, document);
"""

SIDEBAR_JS = Template(
    r"""// Slide-out sidebar menu with keyboard shortcuts while it is open.
(function (document) {
  var slideClass = $slide_class;
  var sidebar = document.getElementById("sidebar");
  var toggle = document.querySelector("a#slide");
  var fade = document.getElementById("fade");
  if (!sidebar || !toggle || !fade) {
    return;
  }

  function display(id, value) {
    var el = document.getElementById(id);
    if (el) {
      el.style.display = value;
    }
  }

  function open() {
    sidebar.classList.add(slideClass);
    toggle.classList.add(slideClass);
    fade.classList.add(slideClass);
    display("open", "none");
    display("search", "none");
    display("close", "inline-block");
  }

  function close() {
    sidebar.classList.remove(slideClass);
    toggle.classList.remove(slideClass);
    fade.classList.remove(slideClass);
    display("open", "inline-block");
    display("search", "inline-block");
    display("close", "none");
  }

  function follow(selector) {
    var link = sidebar.querySelector(selector);
    if (link) {
      link.click();
    }
  }

  toggle.addEventListener("click", function (e) {
    e.preventDefault();
    open();
  });
  fade.addEventListener("click", close);

  document.addEventListener("keydown", function (e) {
    if (!sidebar.classList.contains(slideClass)) {
      return;
    }
    switch (e.key) {
      case "1":
      case "2":
      case "3":
      case "4":
      case "5":
        follow("ul:first-child li:nth-child(" + e.key + ") a");
        break;
      case "g":
        follow("ul:nth-child(2) li:first-child a");
        break;
      case "t":
        follow("ul:nth-child(2) li:nth-child(3) a");
        break;
      case "s":
        close();
        var search = document.getElementById("search");
        if (search) {
          search.click();
        }
        break;
    }
  });
})(document);
"""
)

SEARCH_JS = Template(
    r"""// Client-side search overlay.
(function (window, document) {
  var wrapper = document.querySelector(".search-wrapper");
  var form = document.querySelector(".search-form");
  var closeIcon = document.querySelector(".icon-remove-sign");
  var triggers = document.querySelectorAll(".dosearch");
  if (!wrapper || !form) {
    return;
  }
  var body = document.body;
  var started = false;

  function start() {
    if (started || typeof window.SimpleJekyllSearch !== "function") {
      return;
    }
    var input = form.querySelector("input");
    var results = document.getElementById("results-container");
    if (!input || !results) {
      return;
    }
    window.SimpleJekyllSearch({
      searchInput: input,
      resultsContainer: results,
      json: $search_json
    });
    started = true;
  }

  function open() {
    wrapper.classList.toggle("active");
    form.classList.toggle("active");
    body.classList.toggle("search-overlay");
    var input = form.querySelector("input");
    if (input) {
      input.focus();
    }
    start();
  }

  function close() {
    wrapper.classList.remove("active");
    form.classList.remove("active");
    body.classList.remove("search-overlay");
  }

  for (var i = 0; i < triggers.length; i++) {
    triggers[i].addEventListener("click", open);
  }
  if (closeIcon) {
    closeIcon.addEventListener("click", close);
  }
  document.addEventListener("keydown", function (e) {
    if (form.classList.contains("active") && (e.key === "Escape" || e.key === "Esc")) {
      close();
    }
  });
})(window, document);
"""
)

ANALYTICS_JS = Template(
    r"""// Pageview beacon.
(function (i, s, o, g, r, a, m) {
  i["GoogleAnalyticsObject"] = r;
  i[r] = i[r] || function () {
    (i[r].q = i[r].q || []).push(arguments);
  };
  i[r].l = 1 * new Date();
  a = s.createElement(o);
  m = s.getElementsByTagName(o)[0];
  a.async = 1;
  a.src = g;
  m.parentNode.insertBefore(a, m);
})(window, document, "script", "https://www.google-analytics.com/analytics.js", "ga");

ga("create", $tracking_id, "auto");
ga("send", "pageview");
"""
)


def _js(value: object) -> str:
    return json.dumps(value)


def render_scripts(options: ThemeOptions | None = None) -> dict[str, str]:
    """Render every theme script.

    Returns:
        Mapping of file name (under src/js/) to JavaScript source. The
        analytics beacon is only included when a tracking id is configured.
    """
    opts = options or ThemeOptions()
    scripts = {
        "equalize.js": EQUALIZE_JS.substitute(
            container=_js(opts.equalize_container),
            tags=_js(opts.equalize_tags),
            debounce=_js(opts.debounce_ms),
        ),
        "header.js": HEADER_JS.substitute(
            header=_js(opts.header_selector),
            threshold=_js(opts.scroll_threshold),
            class_name=_js(opts.header_class),
            debounce=_js(opts.debounce_ms),
        ),
        "links.js": LINKS_JS,
        "navtoggle.js": NAVTOGGLE_JS.substitute(
            toggle=_js(opts.nav_toggle),
            collapse=_js(opts.nav_collapse),
        ),
        "search.js": SEARCH_JS.substitute(search_json=_js(opts.search_json)),
        "sidebar.js": SIDEBAR_JS.substitute(slide_class=_js(opts.sidebar_class)),
    }
    if opts.analytics_id:
        scripts["analytics.js"] = ANALYTICS_JS.substitute(tracking_id=_js(opts.analytics_id))
    return dict(sorted(scripts.items()))
