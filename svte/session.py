"""Toolkit-independent parts of a terminal session widget."""

import logging as py_logging

logger = py_logging.getLogger(__name__)


class SessionEvents:
    """Forwards terminal signals to the handler table given by TabManager.

    Mixed into the VTE widget; expects ``self._handlers`` and
    ``self.get_window_title()``.
    """

    def _on_spawn_done(self, _terminal, pid, error, *_data):
        if error:
            self._handlers["spawn-failed"](self, error.message)
        else:
            logger.debug("Shell started with pid %s", pid)

    def _on_exit(self, _terminal, status):
        self._handlers["child-exited"](self, status)

    def _on_title_changed(self, _terminal):
        self._handlers["window-title-changed"](self, self.get_window_title())


def find_tab_label(tab_widget, label_type):
    """Return the text label inside a tab widget built by ``append_page``.

    The widget is an event box holding a box whose first child is the
    label. Returns ``None`` when the layout does not match.
    """
    if tab_widget is None:
        return None
    box = tab_widget.get_child()
    children = box.get_children() if box is not None else []
    if children and isinstance(children[0], label_type):
        return children[0]
    return None
