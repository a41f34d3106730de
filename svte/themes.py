"""Built-in color themes.

Each theme is a foreground/background pair plus the 16 ANSI palette slots
(black, red, green, yellow, blue, magenta, cyan, white, then the bright
variants), written as ``#rrggbb`` strings.
"""

from collections import namedtuple
from dataclasses import dataclass

DEFAULT_THEME = "gruvbox"

# ── Themes ─────────────────────────────────────────────────────────────────────

THEMES = {
    "gruvbox": {
        "bg": "#282828", "fg": "#ebdbb2",
        "palette": [
            "#282828", "#cc241d", "#98971a", "#d79921",
            "#458588", "#b16286", "#689d6a", "#a89984",
            "#928374", "#fb4934", "#b8bb26", "#fabd2f",
            "#83a598", "#d3869b", "#8ec07c", "#ebdbb2",
        ],
    },
    "solarized-dark": {
        "bg": "#002b36", "fg": "#839496",
        "palette": [
            "#073642", "#dc322f", "#859900", "#b58900",
            "#268bd2", "#d33682", "#2aa198", "#eee8d5",
            "#002b36", "#cb4b16", "#586e75", "#657b83",
            "#839496", "#6c71c4", "#93a1a1", "#fdf6e3",
        ],
    },
    "tango-dark": {
        "bg": "#1e1e2e", "fg": "#d0cfcc",
        "palette": [
            "#171421", "#c01c28", "#26a269", "#a2734c",
            "#12488b", "#a347ba", "#2aa1b3", "#d0cfcc",
            "#5e5c64", "#f66151", "#33d17a", "#e9ad0c",
            "#2a7bde", "#c061cb", "#33c7de", "#ffffff",
        ],
    },
    "catppuccin-mocha": {
        "bg": "#1e1e2e", "fg": "#cdd6f4",
        "palette": [
            "#45475a", "#f38ba8", "#a6e3a1", "#f9e2af",
            "#89b4fa", "#f5c2e7", "#94e2d5", "#bac2de",
            "#585b70", "#f38ba8", "#a6e3a1", "#f9e2af",
            "#89b4fa", "#f5c2e7", "#94e2d5", "#a6adc8",
        ],
    },
    "dracula": {
        "bg": "#282a36", "fg": "#f8f8f2",
        "palette": [
            "#21222c", "#ff5555", "#50fa7b", "#f1fa8c",
            "#bd93f9", "#ff79c6", "#8be9fd", "#f8f8f2",
            "#6272a4", "#ff6e6e", "#69ff94", "#ffffa5",
            "#d6acff", "#ff92df", "#a4ffff", "#ffffff",
        ],
    },
}


Color = namedtuple("Color", "red green blue alpha")


def parse_color(hex_color, alpha=1.0):
    """'#rrggbb' -> Color with channels in [0, 1]."""
    h = hex_color.lstrip("#")
    if len(h) != 6:
        raise ValueError(f"bad color {hex_color!r}")
    r, g, b = (int(h[i:i + 2], 16) / 255 for i in (0, 2, 4))
    return Color(r, g, b, alpha)


@dataclass(frozen=True)
class Theme:
    name: str
    foreground: Color
    background: Color
    palette: tuple

    def hex_colors(self):
        """Source strings, in the order ``(fg, bg, palette)``."""
        spec = THEMES[self.name]
        return spec["fg"], spec["bg"], list(spec["palette"])


def theme_names():
    return list(THEMES)


def resolve(name):
    """Theme called *name*, or the default theme for unknown names."""
    if name not in THEMES:
        name = DEFAULT_THEME
    spec = THEMES[name]
    return Theme(
        name=name,
        foreground=parse_color(spec["fg"]),
        background=parse_color(spec["bg"]),
        palette=tuple(parse_color(h) for h in spec["palette"]),
    )
