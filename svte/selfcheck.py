"""Non-interactive diagnostics behind ``svte --test``."""

import logging as py_logging
import sys
from dataclasses import dataclass

from svte import themes
from svte.config import load_config
from svte.errors import ExitCode
from svte.keybindings import KeyBindingTable, matches, parse_accelerator
from svte.tabs import TabManager

logger = py_logging.getLogger(__name__)

MIN_GTK = (3, 0)
MIN_VTE = (0, 50)


@dataclass
class CheckResult:
    name: str
    ok: bool
    detail: str = ""


class SelfCheckRunner:
    """Runs each check and reports PASS/FAIL lines.

    ``keys`` is a key resolver (see ``svte.keybindings``), ``versions`` a
    callable returning ``{"gtk": (major, minor, micro), "vte": (...)}`` and
    ``rgba`` converts a ``#rrggbb`` string to the toolkit's color object.
    """

    def __init__(self, keys, versions, rgba, config=None):
        self.keys = keys
        self.versions = versions
        self.rgba = rgba
        self.config = config or load_config()

    def checks(self):
        return [
            ("toolkit versions", self.check_versions),
            ("theme colors", self.check_themes),
            ("default keybindings", self.check_keybindings),
            ("component construction", self.check_construction),
        ]

    def run(self):
        results = []
        for name, check in self.checks():
            try:
                detail = check()
            except Exception as exc:
                logger.debug("Check %r failed", name, exc_info=True)
                results.append(CheckResult(name, False, str(exc)))
            else:
                results.append(CheckResult(name, True, detail or ""))
        return results

    def report(self, stream=None):
        return print_report(self.run(), stream)

    # ── Checks ─────────────────────────────────────────────────────────────────

    def check_versions(self):
        found = self.versions()
        gtk, vte = tuple(found["gtk"]), tuple(found["vte"])
        if gtk[0] != MIN_GTK[0] or gtk[:2] < MIN_GTK:
            raise ValueError(f"GTK 3 required, found {_dotted(gtk)}")
        if vte[:2] < MIN_VTE:
            raise ValueError(f"VTE >= {_dotted(MIN_VTE)} required, found {_dotted(vte)}")
        return f"GTK {_dotted(gtk)}, VTE {_dotted(vte)}"

    def check_themes(self):
        for name in themes.theme_names():
            theme = themes.resolve(name)
            fg, bg, palette = theme.hex_colors()
            if len(palette) != 16 or len(theme.palette) != 16:
                raise ValueError(f"{name}: palette has {len(palette)} entries")
            for hex_color in [fg, bg] + palette:
                color = self.rgba(hex_color)
                channels = (color.red, color.green, color.blue, color.alpha)
                if not all(0.0 <= c <= 1.0 for c in channels):
                    raise ValueError(f"{name}: {hex_color} out of range")
                if color.alpha != 1.0:
                    raise ValueError(f"{name}: {hex_color} is not opaque")
        if themes.resolve("no-such-theme") != themes.resolve(themes.DEFAULT_THEME):
            raise ValueError("unknown theme does not fall back to the default")
        return f"{len(themes.theme_names())} themes"

    def check_keybindings(self):
        table = KeyBindingTable.from_config(self.config, self.keys)
        for spec in self.config["keybindings"].values():
            binding = parse_accelerator(spec, self.keys)
            if not matches(binding, binding.modifiers, binding.keycode, self.keys):
                raise ValueError(f"{spec} does not match itself")
        return f"{len(table)} bindings"

    def check_construction(self):
        theme = themes.resolve(self.config["theme"])
        KeyBindingTable.from_config(self.config, self.keys)
        TabManager(_no_session, None, self.config, theme, _noop)
        return ""


def print_report(results, stream=None):
    """Print one PASS/FAIL line per result plus a summary; return the exit code."""
    stream = stream or sys.stdout
    for result in results:
        status = "PASS" if result.ok else "FAIL"
        line = f"[{status}] {result.name}"
        if result.detail:
            line = f"{line}: {result.detail}"
        print(line, file=stream)
    failed = sum(1 for r in results if not r.ok)
    print(f"{len(results) - failed} passed, {failed} failed", file=stream)
    return int(ExitCode.CHECK_FAILED if failed else ExitCode.SUCCESS)


def _dotted(version):
    return ".".join(str(part) for part in version)


def _no_session(_handlers):
    raise RuntimeError("self-check never opens sessions")


def _noop():
    pass
