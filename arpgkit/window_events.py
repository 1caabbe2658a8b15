"""Window input events and a FIFO queue for them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag, auto

__all__ = ["Key", "MouseButton", "ModifierKey", "EventType", "Event", "EventQueue"]


class Key(IntEnum):
    """Keyboard keys; values match the GLFW key codes and must not change."""

    SPACE = 32
    APOSTROPHE = 39
    COMMA = 44
    MINUS = 45
    PERIOD = 46
    SLASH = 47
    NUM0 = 48
    NUM1 = 49
    NUM2 = 50
    NUM3 = 51
    NUM4 = 52
    NUM5 = 53
    NUM6 = 54
    NUM7 = 55
    NUM8 = 56
    NUM9 = 57
    SEMICOLON = 59
    EQUAL = 61
    A = 65
    B = 66
    C = 67
    D = 68
    E = 69
    F = 70
    G = 71
    H = 72
    I = 73  # noqa: E741
    J = 74
    K = 75
    L = 76
    M = 77
    N = 78
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    U = 85
    V = 86
    W = 87
    X = 88
    Y = 89
    Z = 90
    LBRACKET = 91
    BACKSLASH = 92
    RBRACKET = 93
    GRAVE_ACCENT = 96
    WORLD1 = 161
    WORLD2 = 162
    ESCAPE = 256
    ENTER = 257
    TAB = 258
    BACKSPACE = 259
    INSERT = 260
    DELETE = 261
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265
    PAGE_UP = 266
    PAGE_DOWN = 267
    HOME = 268
    END = 269
    CAPS_LOCK = 280
    SCROLL_LOCK = 281
    NUM_LOCK = 282
    PRINT_SCREEN = 283
    PAUSE = 284
    F1 = 290
    F2 = 291
    F3 = 292
    F4 = 293
    F5 = 294
    F6 = 295
    F7 = 296
    F8 = 297
    F9 = 298
    F10 = 299
    F11 = 300
    F12 = 301
    F13 = 302
    F14 = 303
    F15 = 304
    F16 = 305
    F17 = 306
    F18 = 307
    F19 = 308
    F20 = 309
    F21 = 310
    F22 = 311
    F23 = 312
    F24 = 313
    F25 = 314
    NUMPAD0 = 320
    NUMPAD1 = 321
    NUMPAD2 = 322
    NUMPAD3 = 323
    NUMPAD4 = 324
    NUMPAD5 = 325
    NUMPAD6 = 326
    NUMPAD7 = 327
    NUMPAD8 = 328
    NUMPAD9 = 329
    NUMPAD_DECIMAL = 330
    NUMPAD_DIVIDE = 331
    NUMPAD_MULTIPLY = 332
    NUMPAD_SUBTRACT = 333
    NUMPAD_ADD = 334
    NUMPAD_ENTER = 335
    NUMPAD_EQUAL = 336
    LSHIFT = 340
    LCONTROL = 341
    LALT = 342
    LSUPER = 343
    RSHIFT = 344
    RCONTROL = 345
    RALT = 346
    RSUPER = 347
    MENU = 348


class MouseButton(IntEnum):
    BUTTON1 = 0
    BUTTON2 = 1
    BUTTON3 = 2
    BUTTON4 = 3
    BUTTON5 = 4
    BUTTON6 = 5
    BUTTON7 = 6
    BUTTON8 = 7
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class ModifierKey(IntFlag):
    """Modifier keys held down (or lock keys enabled) during an event."""

    SHIFT = 1 << 1
    CONTROL = 1 << 2
    ALT = 1 << 3
    SUPER = 1 << 4
    CAPS_LOCK = 1 << 5
    NUM_LOCK = 1 << 6


class EventType(Enum):
    WINDOW_CLOSE = auto()
    WINDOW_SIZE = auto()
    FRAMEBUFFER_SIZE = auto()
    KEY_PRESS = auto()
    KEY_REPEAT = auto()
    KEY_RELEASE = auto()
    MOUSE_BUTTON_PRESS = auto()
    MOUSE_BUTTON_RELEASE = auto()
    MOUSE_MOVE = auto()


@dataclass(frozen=True)
class Event:
    """A window event.

    Which fields carry data depends on the type: ``width``/``height`` for
    size events, ``key``/``scancode``/``modifiers`` for key events,
    ``button``/``modifiers`` for mouse button events and ``x``/``y`` for
    mouse moves.
    """

    type: EventType
    width: int = 0
    height: int = 0
    key: Key | None = None
    scancode: int = 0
    modifiers: ModifierKey = ModifierKey(0)
    button: MouseButton | None = None
    x: float = 0.0
    y: float = 0.0


class EventQueue:
    """First-in, first-out queue of window events."""

    def __init__(self) -> None:
        self._events: deque[Event] = deque()

    def push(self, event: Event) -> None:
        self._events.append(event)

    def pop(self) -> Event | None:
        """Remove and return the oldest event, or None if the queue is empty."""
        return self._events.popleft() if self._events else None

    def __len__(self) -> int:
        return len(self._events)