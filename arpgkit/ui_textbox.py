"""Dialogue textboxes: typed-out RML text, options and a queue of boxes."""

from __future__ import annotations

import bisect
import re
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional, Sequence

from .ui_bindings import TextboxBindings

__all__ = [
    "OPENING_SOUND_ITEM_FANFARE",
    "DEFAULT_TYPING_SOUND",
    "TextboxSprite",
    "Textbox",
    "TextboxController",
    "is_plain",
    "plain_count",
    "nth_plain",
    "replace_graphical_plain_with_nbsp",
    "sprite_name",
    "create_textbox_presets",
    "presets_with_prefix",
]

OPENING_SOUND_ITEM_FANFARE = "snd_item_fanfare"
DEFAULT_TYPING_SOUND = "snd_txt1"

_SOUND_CLICK = "event:/ui/snd_button_click"
_SOUND_HOVER = "event:/ui/snd_button_hover"
_NBSP = "&nbsp;"
_BRACKET_RE = re.compile(r"[<>]")


class TextboxSprite(Enum):
    NONE = auto()
    SKULL = auto()
    GOLDEN_KEY = auto()


@dataclass
class Textbox:
    """One box of dialogue; ``text`` is RML and ``typing_speed`` is in characters per second."""

    path: str = ""
    text: str = ""
    sprite: TextboxSprite = TextboxSprite.NONE
    options: list[str] = field(default_factory=list)
    options_callback: Optional[Callable[[str], None]] = None
    opening_sound: str = ""
    typing_sound: str = DEFAULT_TYPING_SOUND
    typing_speed: float = 30.0


def _is_graph(char: str) -> bool:
    return len(char) == 1 and "!" <= char <= "~"


def is_plain(rml: str, pos: int) -> bool:
    """Return True if the character at pos is plain text rather than part of a tag."""
    match = _BRACKET_RE.search(rml, pos)
    if match is None:
        return True
    if match.group() == "<":
        return match.start() != pos
    return False


def _plain_mask(rml: str) -> list[bool]:
    """is_plain for every position, computed in one backward pass."""
    mask = [True] * len(rml)
    next_bracket: Optional[str] = None
    for pos in reversed(range(len(rml))):
        char = rml[pos]
        if char in "<>":
            next_bracket = char
            mask[pos] = False
        else:
            mask[pos] = next_bracket != ">"
    return mask


def plain_count(rml: str) -> int:
    """Count the plain text characters in the string."""
    return sum(_plain_mask(rml))


def nth_plain(rml: str, n: int) -> str:
    """Return the nth plain text character, or an empty string if there are fewer."""
    plain = [char for char, keep in zip(rml, _plain_mask(rml)) if keep]
    return plain[n] if 0 <= n < len(plain) else ""


def replace_graphical_plain_with_nbsp(rml: str, offset: int) -> str:
    """Replace visible plain characters from the offset-th one on with non-breaking spaces.

    Keeps the layout of text being typed out from shifting.
    """
    parts: list[str] = []
    count = 0
    for char, plain in zip(rml, _plain_mask(rml)):
        replace = False
        if plain:
            replace = count >= offset and _is_graph(char)
            count += 1
        parts.append(_NBSP if replace else char)
    return "".join(parts)


_SPRITE_NAMES = {
    TextboxSprite.NONE: "",
    TextboxSprite.SKULL: "icon-skull",
    TextboxSprite.GOLDEN_KEY: "icon-golden-key",
}


def sprite_name(sprite: TextboxSprite) -> str:
    """Return the name of the icon shown for a textbox sprite."""
    return _SPRITE_NAMES.get(sprite, "")


def create_textbox_presets(
    on_restart: Callable[[], None], on_main_menu: Callable[[], None]
) -> list[Textbox]:
    """Build the built-in textboxes, sorted by path."""

    def answer_try_again(option: str) -> None:
        if option == "Yes":
            on_restart()
        elif option == "No":
            on_main_menu()

    presets = [
        Textbox(
            path="player/die/0",
            text=(
                "You are <span style='color: red'>deader than dead</span>!<br/>"
                "Oh, what a pity that your adventure should end here, and so soon..."
            ),
            sprite=TextboxSprite.SKULL,
        ),
        Textbox(
            path="player/die/1",
            text="Would you like to try again?",
            options=["Yes", "No"],
            options_callback=answer_try_again,
        ),
    ]
    presets.sort(key=lambda textbox: textbox.path)
    return presets


def presets_with_prefix(presets: Sequence[Textbox], path: str) -> list[Textbox]:
    """Return the presets whose path starts with the given one; presets must be sorted by path."""
    size = len(path)

    def prefix(textbox: Textbox) -> str:
        return textbox.path[:size]

    first = bisect.bisect_left(presets, path, key=prefix)
    last = bisect.bisect_right(presets, path, key=prefix)
    return list(presets[first:last])


class TextboxController:
    """Shows one textbox at a time, types its text out and queues the rest.

    ``play_sound`` receives sound event paths; ``on_visibility_changed``
    is told when the textbox document should be shown or hidden.
    """

    def __init__(
        self,
        bindings: Optional[TextboxBindings] = None,
        play_sound: Optional[Callable[[str], None]] = None,
        on_visibility_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self.bindings = bindings if bindings is not None else TextboxBindings()
        self.current: Optional[Textbox] = None
        self._play_sound = play_sound
        self._on_visibility_changed = on_visibility_changed
        self._queue: deque[Textbox] = deque()
        self._typing_time = 0.0
        self._typing_counter = 0

    def __len__(self) -> int:
        """Number of textboxes waiting in the queue."""
        return len(self._queue)

    def _sound(self, path: str) -> None:
        if self._play_sound is not None:
            self._play_sound(path)

    def _set_visible(self, visible: bool) -> None:
        if self._on_visibility_changed is not None:
            self._on_visibility_changed(visible)

    def is_open(self) -> bool:
        return self.current is not None

    def is_typing(self) -> bool:
        if self.current is None:
            return False
        return self._typing_counter < plain_count(self.current.text)

    def skip_typing(self) -> None:
        if self.current is None:
            return
        self._typing_counter = plain_count(self.current.text)

    def open(self, textbox: Textbox) -> None:
        self.current = textbox
        self._typing_time = 0.0
        self._typing_counter = 0
        if textbox.opening_sound:
            self._sound("event:/" + textbox.opening_sound)
        self._set_visible(True)

    def enqueue(self, textbox: Textbox) -> None:
        self._queue.append(textbox)

    def open_or_enqueue(self, textbox: Textbox) -> None:
        if self.is_open():
            self.enqueue(textbox)
        else:
            self.open(textbox)

    def open_next_in_queue(self) -> bool:
        """Open the next queued textbox; close the current one and return False if none is left."""
        if not self._queue:
            self.close()
            return False
        self.open(self._queue.popleft())
        return True

    def close(self) -> None:
        self.current = None
        self.bindings.clear()
        self._set_visible(False)

    def close_and_clear_queue(self) -> None:
        self.close()
        self._queue.clear()

    def update(self, dt: float) -> None:
        """Type out more text and refresh the bindings."""
        textbox = self.current
        if textbox is None:
            return

        count = plain_count(textbox.text)
        if self._typing_counter < count and textbox.typing_speed > 0.0:
            seconds_per_char = 1.0 / textbox.typing_speed
            self._typing_time += dt
            if self._typing_time >= seconds_per_char:
                self._typing_time -= seconds_per_char
                if _is_graph(nth_plain(textbox.text, self._typing_counter)):
                    self._sound("event:/" + textbox.typing_sound)
                self._typing_counter += 1
        else:
            self._typing_counter = count

        bindings = self.bindings
        bindings.text = replace_graphical_plain_with_nbsp(textbox.text, self._typing_counter)
        bindings.has_sprite = textbox.sprite is not TextboxSprite.NONE
        bindings.sprite = sprite_name(textbox.sprite)
        if self._typing_counter == count:
            bindings.has_options = bool(textbox.options)
            bindings.options = list(textbox.options)
        else:
            bindings.has_options = False
            bindings.options.clear()
            bindings.selected_option = 0

    def on_confirm_key(self) -> None:
        """Skip typing, choose the selected option, or move on to the next textbox."""
        textbox = self.current
        if textbox is None:
            return
        bindings = self.bindings
        if self.is_typing():
            self.skip_typing()
        elif textbox.options_callback is not None and bindings.selected_option < len(bindings.options):
            textbox.options_callback(bindings.options[bindings.selected_option])
            self._sound(_SOUND_CLICK)
        else:
            self.open_next_in_queue()

    def on_up_key(self) -> None:
        if self.current is None:
            return
        if self.bindings.selected_option > 0:
            self.bindings.selected_option -= 1
            self._sound(_SOUND_HOVER)

    def on_down_key(self) -> None:
        if self.current is None:
            return
        if self.bindings.selected_option + 1 < len(self.bindings.options):
            self.bindings.selected_option += 1
            self._sound(_SOUND_HOVER)