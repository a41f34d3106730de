"""Keyboard shortcuts: accelerator parsing and key-event dispatch.

Key names are resolved through a small *key resolver* object so this module
stays free of toolkit imports. The resolver must provide::

    from_name(name)     -> keyval, or None when the name is unknown
    to_lower(keyval)    -> keyval
    to_unicode(keyval)  -> the character for keyval, or ""

``svte.window.GdkKeys`` is the GDK-backed implementation.
"""

import enum
import logging as py_logging
import re
from dataclasses import dataclass

from svte.errors import ExitCode, InvalidAcceleratorSpec, SvteError

logger = py_logging.getLogger(__name__)


class ModifierMask(enum.IntFlag):
    """Modifier bits, numerically identical to GDK's ``ModifierType``."""

    NONE = 0
    SHIFT = 1 << 0
    CONTROL = 1 << 2
    ALT = 1 << 3


# CapsLock (1 << 1) and NumLock (1 << 4) fall outside this mask.
DEFAULT_MOD_MASK = ModifierMask.SHIFT | ModifierMask.CONTROL | ModifierMask.ALT

_MODIFIER_NAMES = {
    "control": ModifierMask.CONTROL,
    "ctrl": ModifierMask.CONTROL,
    "ctl": ModifierMask.CONTROL,
    "primary": ModifierMask.CONTROL,
    "shift": ModifierMask.SHIFT,
    "shft": ModifierMask.SHIFT,
    "alt": ModifierMask.ALT,
    "mod1": ModifierMask.ALT,
}

_ANGLE_MODIFIER = re.compile(r"<([^<>]*)>")
_JUMP_DIGITS = "123456789"


class Action(enum.Enum):
    NEW_TAB = "new_tab"
    CLOSE_TAB = "close_tab"
    NEXT_TAB = "next_tab"
    PREV_TAB = "prev_tab"
    COPY = "copy"
    PASTE = "paste"


@dataclass(frozen=True)
class KeyBinding:
    action: Action
    modifiers: ModifierMask
    keycode: int


def effective_modifiers(state):
    """Strip lock keys and anything else outside Control/Shift/Alt."""
    return ModifierMask(int(state) & DEFAULT_MOD_MASK)


# ── Parsing ────────────────────────────────────────────────────────────────────

def _modifier(token, spec):
    try:
        return _MODIFIER_NAMES[token.strip().lower()]
    except KeyError:
        raise InvalidAcceleratorSpec(spec, f"unknown modifier {token!r}") from None


def _split(spec):
    """Split *spec* into (modifier tokens, key token)."""
    text = spec.strip()
    if text.startswith("<"):
        mods = []
        pos = 0
        for match in _ANGLE_MODIFIER.finditer(text):
            if match.start() != pos:
                break
            mods.append(match.group(1))
            pos = match.end()
        key = text[pos:].strip()
        if "<" in key or ">" in key:
            raise InvalidAcceleratorSpec(spec, "malformed modifier list")
        return mods, key
    if text == "+":
        return [], "+"
    if text.endswith("++"):
        head = text[:-2]
        return (head.split("+") if head else []), "+"
    tokens = text.split("+")
    return tokens[:-1], tokens[-1].strip()


def parse_accelerator(spec, keys, action=None):
    """Parse 'Control+Shift+T' (or '<Control><Shift>t') into a KeyBinding.

    Raises InvalidAcceleratorSpec when a modifier is unknown or the key
    token is missing or not a key the resolver knows.
    """
    mod_tokens, key_name = _split(spec)
    mods = ModifierMask.NONE
    for token in mod_tokens:
        mods |= _modifier(token, spec)
    if not key_name:
        raise InvalidAcceleratorSpec(spec, "missing key")
    keyval = keys.from_name(key_name)
    if keyval is None:
        raise InvalidAcceleratorSpec(spec, f"unknown key {key_name!r}")
    return KeyBinding(action=action, modifiers=mods, keycode=keys.to_lower(keyval))


def matches(binding, modifiers, keycode, keys):
    """True when the key event (modifiers, keycode) triggers *binding*."""
    return (
        keys.to_lower(keycode) == binding.keycode
        and effective_modifiers(modifiers) == binding.modifiers
    )


def resolve_digit_jump(modifiers, keycode, tab_count, keys):
    """Alt+1..Alt+9 -> zero-based tab index, when that tab exists."""
    if effective_modifiers(modifiers) != ModifierMask.ALT:
        return None
    char = keys.to_unicode(keycode)
    if len(char) != 1 or char not in _JUMP_DIGITS:
        return None
    index = int(char) - 1
    if index >= tab_count:
        return None
    return index


# ── Table ──────────────────────────────────────────────────────────────────────

class KeyBindingTable:
    """Fixed action -> binding table built once at startup."""

    def __init__(self, bindings, keys):
        self._keys = keys
        self._bindings = []
        for name, spec in bindings.items():
            try:
                action = Action(name)
            except ValueError:
                raise SvteError(
                    f"unknown keybinding action {name!r}",
                    code=ExitCode.CONFIG_ERROR,
                ) from None
            binding = parse_accelerator(spec, keys, action)
            logger.debug("Bound %s to %s", action.value, spec)
            self._bindings.append(binding)

    @classmethod
    def from_config(cls, config, keys):
        return cls(config["keybindings"], keys)

    def __iter__(self):
        return iter(self._bindings)

    def __len__(self):
        return len(self._bindings)

    def binding_for(self, action):
        for binding in self._bindings:
            if binding.action is action:
                return binding
        return None

    def dispatch(self, modifiers, keycode):
        """First action whose binding matches, or None."""
        for binding in self._bindings:
            if matches(binding, modifiers, keycode, self._keys):
                return binding.action
        return None

    def resolve_digit_jump(self, modifiers, keycode, tab_count):
        return resolve_digit_jump(modifiers, keycode, tab_count, self._keys)
