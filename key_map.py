import curses
import logging
from dataclasses import dataclass, field, fields

log = logging.getLogger(__name__)

NAMED_KEYS = {
    "up": curses.KEY_UP,
    "down": curses.KEY_DOWN,
    "left": curses.KEY_LEFT,
    "right": curses.KEY_RIGHT,
    "pgup": curses.KEY_PPAGE,
    "pgdown": curses.KEY_NPAGE,
    "home": curses.KEY_HOME,
    "end": curses.KEY_END,
    "space": ord(" "),
    "enter": 10,
    "esc": 27,
    "tab": 9,
}


def key_code(name: str):
    """Translate a key name ("j", "pgdown", "ctrl+u") to a curses key code.
    Returns None for names that cannot be mapped."""
    if not isinstance(name, str) or not name:
        return None
    if name in NAMED_KEYS:
        return NAMED_KEYS[name]
    if name.startswith("ctrl+") and len(name) == 6:
        return ord(name[-1].lower()) & 0x1F
    if len(name) == 1:
        return ord(name)
    return None


@dataclass
class KeyBinding:
    keys: list[str]
    help_key: str = ""
    help_desc: str = ""
    codes: frozenset = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.set_keys(self.keys)

    def set_keys(self, keys):
        self.keys = list(keys)
        codes = set()
        for k in self.keys:
            code = key_code(k)
            if code is None:
                log.warning("ignoring unknown key name %r", k)
                continue
            codes.add(code)
        self.codes = frozenset(codes)

    def matches(self, ch) -> bool:
        if isinstance(ch, str):
            ch = key_code(ch)
        return ch in self.codes


@dataclass
class KeyMap:
    line_up: KeyBinding
    line_down: KeyBinding
    line_left: KeyBinding
    line_right: KeyBinding
    page_up: KeyBinding
    page_down: KeyBinding
    half_page_up: KeyBinding
    half_page_down: KeyBinding
    goto_top: KeyBinding
    goto_bottom: KeyBinding
    toggle_cell_select: KeyBinding

    def bindings(self):
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    def help_lines(self) -> list[str]:
        pad = max(len(b.help_key) for _, b in self.bindings())
        return [f"{b.help_key.ljust(pad)}  {b.help_desc}" for _, b in self.bindings()]


def default_key_map() -> KeyMap:
    return KeyMap(
        line_up=KeyBinding(["up", "k"], "↑/k", "up"),
        line_down=KeyBinding(["down", "j"], "↓/j", "down"),
        line_left=KeyBinding(["left", "h"], "left/h", "move cells or col left"),
        line_right=KeyBinding(["right", "l"], "right/l", "move cell or cols right"),
        page_up=KeyBinding(["b", "pgup"], "b/pgup", "page up"),
        page_down=KeyBinding(["f", "pgdown", "space"], "f/pgdn", "page down"),
        half_page_up=KeyBinding(["u", "ctrl+u"], "u", "½ page up"),
        half_page_down=KeyBinding(["d", "ctrl+d"], "d", "½ page down"),
        goto_top=KeyBinding(["home", "g"], "g/home", "go to start"),
        goto_bottom=KeyBinding(["end", "G"], "G/end", "go to end"),
        toggle_cell_select=KeyBinding(["t", "ctrl+t"], "t", "toggle cell select"),
    )


def key_map_from_config(overrides) -> KeyMap:
    """Default key map with per-action key lists replaced from config."""
    km = default_key_map()
    if not isinstance(overrides, dict):
        return km
    for action, keys in overrides.items():
        binding = getattr(km, action, None) if isinstance(action, str) else None
        if not isinstance(binding, KeyBinding):
            log.warning("unknown key map action %r", action)
            continue
        if not (isinstance(keys, list) and all(isinstance(k, str) for k in keys)):
            log.warning("key map entry %r must be a list of strings", action)
            continue
        binding.set_keys(keys)
        binding.help_key = "/".join(keys)
    return km
