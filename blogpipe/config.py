"""Configuration constants and defaults for blogpipe."""

import os

# Project file looked up in the project root unless --config is given.
# Override via BLOGPIPE_CONFIG environment variable
CONFIG_FILENAME = os.getenv("BLOGPIPE_CONFIG", "blogpipe.json")

# Dev server; BLOGPIPE_HOST / BLOGPIPE_PORT override these when the project
# file does not set them (read and validated in settings.load_config)
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
HOST_ENV = "BLOGPIPE_HOST"
PORT_ENV = "BLOGPIPE_PORT"

# Site generator (the original pipeline drives Jekyll through bundler)
SITE_COMMAND = ["bundle", "exec", "jekyll", "build"]
SITE_DIR = "_site"

# Watcher timing, in seconds
WATCH_INTERVAL = 0.5
WATCH_DEBOUNCE = 0.3

# Reload client polling, in milliseconds
RELOAD_POLL_MS = 1000

# Live reload endpoints served next to the site files
RELOAD_PREFIX = "/__blogpipe"

# Image optimization level (0-7, same scale as imagemin's optipng)
OPTIMIZATION_LEVEL = 3
