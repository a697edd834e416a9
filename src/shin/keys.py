from dataclasses import dataclass

# Modifier mask bits (IBus ibustypes.h)
SHIFT_MASK = 1 << 0
CONTROL_MASK = 1 << 2
RELEASE_MASK = 1 << 30

# Keysyms (IBus ibuskeysyms.h)
KEY_BACKSPACE = 0xFF08
KEY_TAB = 0xFF09
KEY_RETURN = 0xFF0D
KEY_ESCAPE = 0xFF1B
KEY_DELETE = 0xFFFF
KEY_HOME = 0xFF50
KEY_LEFT = 0xFF51
KEY_UP = 0xFF52
KEY_RIGHT = 0xFF53
KEY_DOWN = 0xFF54
KEY_END = 0xFF57
KEY_KP_ENTER = 0xFF8D
KEY_KP_HOME = 0xFF95
KEY_KP_LEFT = 0xFF96
KEY_KP_UP = 0xFF97
KEY_KP_RIGHT = 0xFF98
KEY_KP_DOWN = 0xFF99
KEY_KP_END = 0xFF9C
KEY_KP_DELETE = 0xFF9F

# Characters outside Latin-1 are sent as 0x01000000 + code point
UNICODE_KEYSYM_OFFSET = 0x01000000

KEY_NAMES = {
    KEY_BACKSPACE: "BackSpace",
    KEY_TAB: "Tab",
    KEY_RETURN: "Return",
    KEY_ESCAPE: "Escape",
    KEY_DELETE: "Delete",
    KEY_HOME: "Home",
    KEY_LEFT: "Left",
    KEY_UP: "Up",
    KEY_RIGHT: "Right",
    KEY_DOWN: "Down",
    KEY_END: "End",
    KEY_KP_ENTER: "KP_Enter",
    KEY_KP_HOME: "KP_Home",
    KEY_KP_LEFT: "KP_Left",
    KEY_KP_UP: "KP_Up",
    KEY_KP_RIGHT: "KP_Right",
    KEY_KP_DOWN: "KP_Down",
    KEY_KP_END: "KP_End",
    KEY_KP_DELETE: "KP_Delete",
}


def keysym_for_char(ch: str) -> int:
    cp = ord(ch)
    return cp if cp <= 0xFF else UNICODE_KEYSYM_OFFSET + cp


@dataclass(frozen=True)
class KeyEvent:
    keyval: int
    keycode: int = 0  # hardware code, carried but unused
    state: int = 0

    @property
    def released(self) -> bool:
        return bool(self.state & RELEASE_MASK)

    @property
    def control(self) -> bool:
        return bool(self.state & CONTROL_MASK)

    def describe(self) -> str:
        name = KEY_NAMES.get(self.keyval)
        if name is None:
            name = f"0x{self.keyval:x}"
        return f"{name} keycode={self.keycode} state=0x{self.state:x}"
