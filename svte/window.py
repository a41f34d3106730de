"""GTK 3 / VTE widgets.

Dependencies: PyGObject, GTK 3, VTE 2.91
    sudo apt install python3-gi gir1.2-vte-2.91 libvte-2.91-0
"""

import logging as py_logging
import os
import sys

import gi

gi.require_version("Gdk", "3.0")
gi.require_version("Gtk", "3.0")
gi.require_version("Vte", "2.91")

from gi.repository import Gdk, Gio, GLib, Gtk, Pango, Vte  # noqa: E402

from svte.app import Application  # noqa: E402
from svte.errors import ExitCode, SvteError  # noqa: E402
from svte.keybindings import KeyBindingTable  # noqa: E402
from svte.session import SessionEvents, find_tab_label  # noqa: E402

logger = py_logging.getLogger(__name__)

APPLICATION_ID = "io.github.svte"

# ── Helpers ────────────────────────────────────────────────────────────────────


def to_rgba(hex_color, alpha=1.0):
    c = Gdk.RGBA()
    c.parse(hex_color)
    c.alpha = alpha
    return c


def toolkit_versions():
    return {
        "gtk": (Gtk.get_major_version(), Gtk.get_minor_version(), Gtk.get_micro_version()),
        "vte": (Vte.get_major_version(), Vte.get_minor_version(), Vte.get_micro_version()),
    }


class GdkKeys:
    """Key resolver backed by GDK keyvals."""

    @staticmethod
    def from_name(name):
        if len(name) == 1:
            return Gdk.unicode_to_keyval(ord(name))
        for candidate in (name, name.lower(), name.capitalize()):
            kv = Gdk.keyval_from_name(candidate)
            if kv and kv != Gdk.KEY_VoidSymbol:
                return kv
        return None

    @staticmethod
    def to_lower(keyval):
        return Gdk.keyval_to_lower(keyval)

    @staticmethod
    def to_unicode(keyval):
        code = Gdk.keyval_to_unicode(keyval)
        return chr(code) if code else ""


# ── Terminal Session ───────────────────────────────────────────────────────────

class TerminalSession(SessionEvents, Vte.Terminal):
    """One VTE terminal; reports its events through *handlers*."""

    def __init__(self, handlers):
        super().__init__()
        self._handlers = handlers

        self.connect("child-exited", self._on_exit)
        self.connect("window-title-changed", self._on_title_changed)

        self.set_hexpand(True)
        self.set_vexpand(True)
        self.show()

    def apply_theme(self, theme):
        fg, bg, palette = theme.hex_colors()
        self.set_colors(to_rgba(fg), to_rgba(bg), [to_rgba(h) for h in palette])

    def apply_font(self, family, size):
        self.set_font(Pango.FontDescription.from_string(f"{family} {size}"))

    def spawn_shell(self, shell):
        self.spawn_async(
            Vte.PtyFlags.DEFAULT,
            os.environ.get("HOME", "/"),
            [shell],
            None,
            GLib.SpawnFlags.DEFAULT,
            None,
            None,
            -1,
            None,
            self._on_spawn_done,
        )

    def copy_selection(self):
        self.copy_clipboard_format(Vte.Format.TEXT)

    def show_error(self, message):
        self.feed(f"svte: failed to start shell: {message}\r\n".encode())


# ── Notebook ───────────────────────────────────────────────────────────────────

class NotebookView:
    """Tab strip backed by a Gtk.Notebook; each label has a close button."""

    def __init__(self, notebook):
        self.notebook = notebook

    def append_page(self, session, title, on_close):
        label = Gtk.Label(label=title)
        btn = Gtk.Button.new_from_icon_name("window-close-symbolic", Gtk.IconSize.MENU)
        btn.set_relief(Gtk.ReliefStyle.NONE)
        btn.connect("clicked", lambda _btn: on_close())

        hbox = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        hbox.pack_start(label, True, True, 0)
        hbox.pack_start(btn, False, False, 0)

        # EventBox for middle-click close
        ebox = Gtk.EventBox()
        ebox.add(hbox)
        ebox.connect("button-press-event", self._on_label_click, on_close)
        ebox.show_all()

        self.notebook.append_page(session, ebox)
        self.notebook.set_tab_reorderable(session, True)

    def remove_page(self, index):
        self.notebook.remove_page(index)

    def set_current_page(self, index):
        self.notebook.set_current_page(index)

    def set_page_title(self, index, title):
        page = self.notebook.get_nth_page(index)
        label = find_tab_label(self.notebook.get_tab_label(page) if page else None, Gtk.Label)
        if label is not None:
            label.set_text(title)

    def set_show_tabs(self, visible):
        self.notebook.set_show_tabs(visible)

    @staticmethod
    def _on_label_click(_widget, event, on_close):
        if event.button == 2:
            on_close()
            return True
        return False


# ── Main Window ────────────────────────────────────────────────────────────────

class TerminalWindow(Gtk.ApplicationWindow):
    """Window with a header bar and a notebook of terminal tabs."""

    def __init__(self, config, **kwargs):
        super().__init__(**kwargs)
        self.set_title("SVTE")
        self.set_default_size(config["window_width"], config["window_height"])

        header = Gtk.HeaderBar()
        header.set_show_close_button(True)
        header.set_title("SVTE")
        add_btn = Gtk.Button.new_from_icon_name("list-add-symbolic", Gtk.IconSize.BUTTON)
        add_btn.set_tooltip_text("New tab")
        add_btn.connect("clicked", lambda _btn: self.app.tabs.new_tab())
        header.pack_start(add_btn)
        self.set_titlebar(header)

        self.notebook = Gtk.Notebook()
        self.notebook.set_scrollable(True)
        self.add(self.notebook)

        self.app = Application(
            config,
            GdkKeys,
            TerminalSession,
            NotebookView(self.notebook),
            self.destroy,
        )

        self.notebook.connect("switch-page", self._on_switch_page)
        self.notebook.connect("page-reordered", self._on_page_reordered)
        self.connect("key-press-event", self._on_key)

    def _on_switch_page(self, _nb, page, num):
        self.app.tabs.on_page_switched(num)
        GLib.idle_add(page.grab_focus)

    def _on_page_reordered(self, _nb, page, num):
        self.app.tabs.on_page_reordered(page, num)

    def _on_key(self, _widget, event):
        return self.app.handle_key_press(event.state, event.keyval)


# ── Application ────────────────────────────────────────────────────────────────

class SvteApp(Gtk.Application):
    def __init__(self, config):
        super().__init__(
            application_id=APPLICATION_ID,
            flags=Gio.ApplicationFlags.NON_UNIQUE,
        )
        self.config = config

    def do_activate(self):
        win = TerminalWindow(self.config, application=self)
        win.app.tabs.new_tab()
        win.show_all()
        win.present()


def run(config):
    """Open the window and block in the GTK main loop."""
    initialized, _argv = Gtk.init_check(sys.argv)
    if not initialized:
        raise SvteError(
            "cannot initialize GTK",
            code=ExitCode.TOOLKIT_ERROR,
            hint="check that DISPLAY or WAYLAND_DISPLAY is set",
        )
    # Validate keybindings
    KeyBindingTable.from_config(config, GdkKeys)
    versions = toolkit_versions()
    logger.info("GTK %s.%s.%s, VTE %s.%s.%s", *versions["gtk"], *versions["vte"])
    return SvteApp(config).run([sys.argv[0]])
