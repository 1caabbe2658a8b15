"""Values and callbacks shared between game code and UI documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

__all__ = ["HudBindings", "TextboxBindings", "DataModel"]


@dataclass
class HudBindings:
    """Values shown on the heads-up display."""

    player_health: int = 0
    arrow_ammo: int = 0
    bomb_ammo: int = 0
    rupee_amount: int = 0


@dataclass
class TextboxBindings:
    """What the textbox document shows; ``text`` is RML markup."""

    text: str = ""
    has_sprite: bool = False
    sprite: str = ""
    has_options: bool = False
    options: list[str] = field(default_factory=list)
    selected_option: int = 0

    def clear(self) -> None:
        """Reset every field to its empty state."""
        self.text = ""
        self.has_sprite = False
        self.sprite = ""
        self.has_options = False
        self.options.clear()
        self.selected_option = 0


class DataModel:
    """Named variables and event callbacks that UI documents can refer to.

    A variable is bound to a getter returning its current value. Variables
    are flagged dirty when bound or when ``dirty_all_variables`` is called,
    and stay dirty until ``clean``.
    """

    def __init__(self) -> None:
        self._variables: dict[str, Callable[[], object]] = {}
        self._events: dict[str, Callable[[], None]] = {}
        self._dirty: set[str] = set()

    def bind(self, name: str, getter: Callable[[], object]) -> None:
        if name in self._variables:
            raise ValueError(f"variable already bound: {name}")
        self._variables[name] = getter
        self._dirty.add(name)

    def bind_event_callback(self, name: str, callback: Callable[[], None]) -> None:
        if name in self._events:
            raise ValueError(f"event callback already bound: {name}")
        self._events[name] = callback

    def get(self, name: str) -> object:
        """Return the current value of a bound variable."""
        try:
            getter = self._variables[name]
        except KeyError:
            raise KeyError(f"no variable bound: {name}") from None
        return getter()

    def fire(self, name: str) -> None:
        """Invoke a bound event callback."""
        try:
            callback = self._events[name]
        except KeyError:
            raise KeyError(f"no event callback bound: {name}") from None
        callback()

    def is_variable_dirty(self, name: str) -> bool:
        if name not in self._variables:
            raise KeyError(f"no variable bound: {name}")
        return name in self._dirty

    def dirty_all_variables(self) -> None:
        self._dirty.update(self._variables)

    def clean(self) -> None:
        self._dirty.clear()