"""svte — a small tabbed terminal built on GTK 3 and VTE."""

__version__ = "0.3.0"
