import pytest

from svte.config import load_config
from svte.tabs import TabManager
from svte.themes import resolve


class FakeKeys:
    """Key resolver using ASCII codes for characters and X11 values for names."""

    NAMED = {
        "Page_Up": 0xFF55,
        "Page_Down": 0xFF56,
        "Tab": 0xFF09,
        "Return": 0xFF0D,
        "plus": ord("+"),
        "minus": ord("-"),
    }

    @classmethod
    def from_name(cls, name):
        if len(name) == 1:
            return ord(name)
        for candidate in (name, name.lower(), name.capitalize()):
            if candidate in cls.NAMED:
                return cls.NAMED[candidate]
        return None

    @staticmethod
    def to_lower(keyval):
        if ord("A") <= keyval <= ord("Z"):
            return keyval + 32
        return keyval

    @staticmethod
    def to_unicode(keyval):
        if 0x20 <= keyval < 0x7F:
            return chr(keyval)
        return ""


class FakeSession:
    def __init__(self, handlers):
        self.handlers = handlers
        self.calls = []
        self.theme = None
        self.font = None
        self.scrollback = None
        self.shell = None
        self.errors = []
        self.destroyed = False

    def apply_theme(self, theme):
        self.theme = theme

    def apply_font(self, family, size):
        self.font = (family, size)

    def set_scrollback_lines(self, lines):
        self.scrollback = lines

    def spawn_shell(self, shell):
        self.shell = shell

    def show_error(self, message):
        self.errors.append(message)

    def grab_focus(self):
        self.calls.append("grab_focus")

    def copy_selection(self):
        self.calls.append("copy")

    def paste_clipboard(self):
        self.calls.append("paste")

    def destroy(self):
        self.destroyed = True

    # Simulate the widget's signals.
    def exit(self, status=0):
        self.handlers["child-exited"](self, status)

    def retitle(self, title):
        self.handlers["window-title-changed"](self, title)

    def fail(self, message):
        self.handlers["spawn-failed"](self, message)


class FakeView:
    def __init__(self):
        self.pages = []
        self.closers = []
        self.current = -1
        self.show_tabs = None

    def append_page(self, session, title, on_close):
        self.pages.append([session, title])
        self.closers.append(on_close)

    def remove_page(self, index):
        del self.pages[index]
        del self.closers[index]

    def set_current_page(self, index):
        self.current = index

    def set_page_title(self, index, title):
        self.pages[index][1] = title

    def set_show_tabs(self, visible):
        self.show_tabs = visible

    @property
    def titles(self):
        return [title for _session, title in self.pages]


class ShutdownRecorder:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


@pytest.fixture
def keys():
    return FakeKeys


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def session_factory():
    return FakeSession


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def shutdown():
    return ShutdownRecorder()


@pytest.fixture
def make_tab_manager(session_factory, view, config, shutdown):
    def make(environ):
        return TabManager(
            session_factory,
            view,
            config,
            resolve(config["theme"]),
            shutdown,
            environ=environ,
        )

    return make


@pytest.fixture
def tab_manager(make_tab_manager):
    return make_tab_manager({"SHELL": "/bin/zsh"})
