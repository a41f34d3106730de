"""Top-level application state and key routing."""

import logging as py_logging

from svte import themes
from svte.keybindings import Action, KeyBindingTable, effective_modifiers
from svte.tabs import TabManager

logger = py_logging.getLogger(__name__)


class Application:
    """Everything one window needs: config, theme, bindings and tabs.

    Built once in the entry point and handed to the window, which forwards
    key presses to :meth:`handle_key_press`. The toolkit pieces arrive as
    arguments (``keys``, ``session_factory``, ``view``, ``on_shutdown``) so the
    routing can be driven without a running main loop.
    """

    def __init__(self, config, keys, session_factory, view, on_shutdown, environ=None):
        self.config = config
        self.theme = themes.resolve(config["theme"])
        self.bindings = KeyBindingTable.from_config(config, keys)
        self.tabs = TabManager(
            session_factory,
            view,
            config,
            self.theme,
            on_shutdown,
            environ=environ,
        )
        self._actions = {
            Action.NEW_TAB: self.tabs.new_tab,
            Action.CLOSE_TAB: self.tabs.close_current,
            Action.NEXT_TAB: self.tabs.next_tab,
            Action.PREV_TAB: self.tabs.prev_tab,
            Action.COPY: self.copy,
            Action.PASTE: self.paste,
        }

    def handle_key_press(self, state, keyval):
        """Run the bound action for a key press; True if it was consumed."""
        mods = effective_modifiers(state)
        action = self.bindings.dispatch(mods, keyval)
        if action is not None:
            logger.debug("Key %#x mods=%s -> %s", keyval, mods, action.value)
            self._actions[action]()
            return True
        index = self.bindings.resolve_digit_jump(mods, keyval, len(self.tabs))
        if index is not None:
            self.tabs.jump_to(index)
            return True
        return False

    def copy(self):
        tab = self.tabs.current
        if tab is not None:
            tab.session.copy_selection()

    def paste(self):
        tab = self.tabs.current
        if tab is not None:
            tab.session.paste_clipboard()
