"""Tab collection and per-tab lifecycle.

TabManager never touches GTK directly. It talks to two collaborators:

*session_factory(handlers)*
    Creates one terminal session. ``handlers`` maps the event names
    ``"child-exited"``, ``"window-title-changed"`` and ``"spawn-failed"`` to
    callables the session invokes as ``handler(session, arg)``. The returned
    session offers ``apply_theme``, ``apply_font``, ``set_scrollback_lines``,
    ``spawn_shell``, ``show_error``, ``grab_focus`` and ``destroy``.

*view*
    The tab strip: ``append_page(session, title, on_close)``,
    ``remove_page(index)``, ``set_current_page(index)``,
    ``set_page_title(index, title)`` and ``set_show_tabs(visible)``.
"""

import enum
import itertools
import logging as py_logging
import os
import unicodedata
from dataclasses import dataclass, field

from svte.config import resolve_shell

logger = py_logging.getLogger(__name__)

MAX_TITLE_LENGTH = 30
EXITED_MARKER = " (exited)"
FAILED_MARKER = " (failed)"


class TabState(enum.Enum):
    CREATED = "created"
    ACTIVE = "active"
    EXITED = "exited"
    REMOVED = "removed"


@dataclass
class Tab:
    id: int
    title: str
    session: object = field(repr=False)
    state: TabState = TabState.CREATED
    error: str = ""


def sanitize_title(text):
    """Printable, single-line, at most MAX_TITLE_LENGTH characters."""
    cleaned = "".join(
        " " if ch.isspace() else ch
        for ch in text
        if ch.isspace() or unicodedata.category(ch)[0] != "C"
    )
    cleaned = " ".join(cleaned.split())
    if len(cleaned) > MAX_TITLE_LENGTH:
        cleaned = "…" + cleaned[-(MAX_TITLE_LENGTH - 1):]
    return cleaned


class TabManager:
    def __init__(self, session_factory, view, config, theme, on_shutdown, environ=None):
        self._session_factory = session_factory
        self._view = view
        self._config = config
        self._theme = theme
        self._on_shutdown = on_shutdown
        self._environ = os.environ if environ is None else environ
        self._tabs = []
        self._current = -1
        self._ids = itertools.count(1)
        self.tab_counter = 0
        self.shutdown_requested = False

    # ── Queries ────────────────────────────────────────────────────────────────

    def __len__(self):
        return len(self._tabs)

    @property
    def tabs(self):
        return list(self._tabs)

    @property
    def current_index(self):
        return self._current

    @property
    def current(self):
        if not self._tabs:
            return None
        return self._tabs[self._current]

    def get(self, tab_id):
        for tab in self._tabs:
            if tab.id == tab_id:
                return tab
        return None

    def _find_session(self, session):
        for index, tab in enumerate(self._tabs):
            if tab.session is session:
                return index, tab
        return -1, None

    # ── Lifecycle ──────────────────────────────────────────────────────────────

    def new_tab(self, default_title=None):
        self.tab_counter += 1
        tab = Tab(
            id=next(self._ids),
            title=default_title or f"Terminal {self.tab_counter}",
            session=None,
        )
        handlers = {
            "child-exited": self.on_session_exited,
            "window-title-changed": self.on_title_changed,
            "spawn-failed": self.on_spawn_failed,
        }
        session = self._session_factory(handlers)
        tab.session = session
        session.apply_theme(self._theme)
        session.apply_font(self._config["font_family"], self._config["font_size"])
        session.set_scrollback_lines(self._config["scrollback_lines"])

        self._tabs.append(tab)
        tab.state = TabState.ACTIVE
        self._view.append_page(session, tab.title, lambda: self.close_tab(tab.id))
        self._view.set_show_tabs(len(self._tabs) > 1)

        shell = resolve_shell(self._environ)
        logger.info("Opening tab %s (%s) running %s", tab.id, tab.title, shell)
        session.spawn_shell(shell)

        self._select(len(self._tabs) - 1)
        return tab.id

    def close_tab(self, tab_id):
        index = next((i for i, t in enumerate(self._tabs) if t.id == tab_id), -1)
        if index < 0:
            return
        tab = self._tabs.pop(index)
        tab.state = TabState.REMOVED
        logger.info("Closing tab %s (%s)", tab.id, tab.title)

        if not self._tabs:
            self._current = -1
        elif index < self._current:
            self._current -= 1
        elif index == self._current:
            self._current = min(index, len(self._tabs) - 1)

        self._view.remove_page(index)
        tab.session.destroy()

        if not self._tabs:
            self._request_shutdown()
            return
        self._view.set_show_tabs(len(self._tabs) > 1)
        self._select(self._current)

    def close_current(self):
        tab = self.current
        if tab is not None:
            self.close_tab(tab.id)

    # ── Navigation ─────────────────────────────────────────────────────────────

    def next_tab(self):
        self._step(1)

    def prev_tab(self):
        self._step(-1)

    def _step(self, direction):
        n = len(self._tabs)
        if n < 2:
            return
        self._select((self._current + direction) % n)

    def jump_to(self, index):
        if 0 <= index < len(self._tabs):
            self._select(index)

    def _select(self, index):
        self._current = index
        self._view.set_current_page(index)
        self._tabs[index].session.grab_focus()

    # ── Session events ─────────────────────────────────────────────────────────

    def on_session_exited(self, session, status=0):
        index, tab = self._find_session(session)
        if tab is None or tab.state is not TabState.ACTIVE:
            return
        logger.info("Shell in tab %s exited with status %s", tab.id, status)
        tab.state = TabState.EXITED
        tab.title = tab.title + EXITED_MARKER
        self._view.set_page_title(index, tab.title)
        if len(self._tabs) == 1:
            self.close_tab(tab.id)

    def on_spawn_failed(self, session, message):
        index, tab = self._find_session(session)
        if tab is None:
            return
        logger.warning("Could not start shell in tab %s: %s", tab.id, message)
        tab.state = TabState.EXITED
        tab.error = message
        tab.title = tab.title + FAILED_MARKER
        session.show_error(message)
        self._view.set_page_title(index, tab.title)

    def on_title_changed(self, session, title):
        index, tab = self._find_session(session)
        if tab is None or tab.state is not TabState.ACTIVE:
            return
        text = sanitize_title(title or "")
        if not text:
            return
        tab.title = text
        self._view.set_page_title(index, text)

    # ── View events ────────────────────────────────────────────────────────────

    def on_page_switched(self, index):
        if 0 <= index < len(self._tabs):
            self._current = index

    def on_page_reordered(self, session, new_index):
        index, tab = self._find_session(session)
        if tab is None or not 0 <= new_index < len(self._tabs):
            return
        current = self.current
        self._tabs.insert(new_index, self._tabs.pop(index))
        self._current = self._tabs.index(current)

    def _request_shutdown(self):
        if self.shutdown_requested:
            return
        self.shutdown_requested = True
        logger.info("Last tab closed, shutting down")
        self._on_shutdown()
