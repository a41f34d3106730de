"""Compiled-in configuration."""

import copy
import os

from svte.themes import DEFAULT_THEME, THEMES

FALLBACK_SHELL = "/bin/bash"

# ── Default Configuration ──────────────────────────────────────────────────────

DEFAULTS = {
    "window_width": 1000,
    "window_height": 700,
    "font_family": "Monospace",
    "font_size": 12,
    "scrollback_lines": 10000,
    "theme": DEFAULT_THEME,
    "keybindings": {
        "new_tab": "Control+Shift+T",
        "close_tab": "Control+Shift+W",
        "next_tab": "Control+Page_Down",
        "prev_tab": "Control+Page_Up",
        "copy": "Control+Shift+C",
        "paste": "Control+Shift+V",
    },
}


def load_config(overrides=None):
    """Return a private copy of the defaults with *overrides* merged in."""
    cfg = copy.deepcopy(DEFAULTS)
    if overrides:
        user = dict(overrides)
        if "keybindings" in user:
            cfg["keybindings"].update(user.pop("keybindings"))
        cfg.update(user)
    if cfg["theme"] not in THEMES:
        cfg["theme"] = DEFAULT_THEME
    cfg["font_size"] = max(6, int(cfg["font_size"]))
    cfg["scrollback_lines"] = max(100, min(1_000_000, int(cfg["scrollback_lines"])))
    return cfg


def resolve_shell(environ=None):
    """Program to run in a new tab: ``$SHELL``, or a fixed fallback."""
    if environ is None:
        environ = os.environ
    return environ.get("SHELL") or FALLBACK_SHELL
