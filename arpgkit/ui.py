"""Menu stack, HUD visibility and UI events for the game's user interface."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .ui_bindings import DataModel, HudBindings
from .ui_textbox import Textbox, TextboxController, create_textbox_presets

__all__ = ["UPDATE_INTERVAL", "MenuType", "UIEventType", "UIEvent", "UserInterface"]

# The UI is refreshed at most this often, independently of the game's frame rate.
UPDATE_INTERVAL = 1.0 / 60.0


class MenuType(Enum):
    """The menus; each value is the name of the document that shows it."""

    MAIN = "main_menu"
    PAUSE = "pause_menu"
    SETTINGS = "settings_menu"
    CREDITS = "credits_menu"


class UIEventType(Enum):
    PLAY_GAME = auto()
    RESTART_MAP = auto()
    QUIT_APP = auto()
    GO_TO_MAIN_MENU = auto()


@dataclass(frozen=True)
class UIEvent:
    """A request from the UI to the game."""

    type: UIEventType


class UserInterface:
    """Keeps the menu stack, HUD visibility and textbox, and reports UI events.

    Menu buttons call the ``on_click_*`` methods, which are also bound as
    event callbacks in ``data_model`` under the same names.
    """

    def __init__(
        self,
        textbox: Optional[TextboxController] = None,
        data_model: Optional[DataModel] = None,
    ) -> None:
        self.debug = False
        self.hud = HudBindings()
        self.textbox = textbox if textbox is not None else TextboxController()
        self.data_model = data_model if data_model is not None else DataModel()
        self.textbox_presets: list[Textbox] = create_textbox_presets(
            self.on_click_restart, self.on_click_main_menu
        )
        self._menu_stack: list[MenuType] = []
        self._visible_menus: set[MenuType] = set()
        self._hud_visible = False
        self._events: list[UIEvent] = []
        self._dt_accumulator = 0.0
        self._create_bindings()

    def _create_bindings(self) -> None:
        hud = self.hud
        textbox = self.textbox.bindings
        model = self.data_model
        model.bind("hud_player_health", lambda: hud.player_health)
        model.bind("hud_arrow_ammo", lambda: hud.arrow_ammo)
        model.bind("hud_bomb_ammo", lambda: hud.bomb_ammo)
        model.bind("hud_rupee_amount", lambda: hud.rupee_amount)
        model.bind("textbox_text", lambda: textbox.text)
        model.bind("textbox_has_sprite", lambda: textbox.has_sprite)
        model.bind("textbox_sprite", lambda: textbox.sprite)
        model.bind("textbox_has_options", lambda: textbox.has_options)
        model.bind("textbox_options", lambda: textbox.options)
        model.bind("textbox_selected_option", lambda: textbox.selected_option)
        for name in (
            "on_click_play",
            "on_click_settings",
            "on_click_credits",
            "on_click_quit",
            "on_click_back",
            "on_click_resume",
            "on_click_restart",
            "on_click_main_menu",
        ):
            model.bind_event_callback(name, getattr(self, name))

    # Menus

    def top_menu(self) -> Optional[MenuType]:
        """Return the menu on top of the stack, or None when no menu is open."""
        return self._menu_stack[-1] if self._menu_stack else None

    def _set_menu_visible(self, menu: MenuType, visible: bool) -> None:
        if visible:
            self._visible_menus.add(menu)
        else:
            self._visible_menus.discard(menu)

    def push_menu(self, menu: MenuType) -> None:
        """Hide the current top menu and show the given one on top of it."""
        if self._menu_stack:
            self._set_menu_visible(self._menu_stack[-1], False)
        self._menu_stack.append(menu)
        self._set_menu_visible(menu, True)

    def pop_menu(self) -> None:
        """Hide the top menu and show the one below it, if any."""
        if not self._menu_stack:
            return
        self._set_menu_visible(self._menu_stack.pop(), False)
        if self._menu_stack:
            self._set_menu_visible(self._menu_stack[-1], True)

    def pop_all_menus(self) -> None:
        self._menu_stack.clear()
        self._visible_menus.clear()

    def is_menu_visible(self, menu: MenuType) -> bool:
        return menu in self._visible_menus

    # HUD

    def hud_visible(self) -> bool:
        return self._hud_visible

    def set_hud_visible(self, visible: bool) -> None:
        self._hud_visible = bool(visible)

    # Input

    def on_escape_key_pressed(self) -> None:
        """Open the pause menu, or close the top menu unless it is the main menu."""
        current = self.top_menu()
        if current is None:
            self.push_menu(MenuType.PAUSE)
        elif current is not MenuType.MAIN:
            self.pop_menu()

    def on_click_play(self) -> None:
        self.pop_all_menus()
        self.set_hud_visible(True)
        self._events.append(UIEvent(UIEventType.PLAY_GAME))

    def on_click_settings(self) -> None:
        self.push_menu(MenuType.SETTINGS)

    def on_click_credits(self) -> None:
        self.push_menu(MenuType.CREDITS)

    def on_click_quit(self) -> None:
        self._events.append(UIEvent(UIEventType.QUIT_APP))

    def on_click_back(self) -> None:
        self.pop_menu()

    def on_click_resume(self) -> None:
        self.pop_menu()

    def on_click_restart(self) -> None:
        self.pop_menu()
        self._events.append(UIEvent(UIEventType.RESTART_MAP))

    def on_click_main_menu(self) -> None:
        self.set_hud_visible(False)
        self.pop_all_menus()
        self.push_menu(MenuType.MAIN)
        self._events.append(UIEvent(UIEventType.GO_TO_MAIN_MENU))

    # Events and state

    def next_event(self) -> Optional[UIEvent]:
        """Remove and return the most recent pending event, or None if there is none."""
        return self._events.pop() if self._events else None

    def is_menu_or_textbox_visible(self) -> bool:
        return self.top_menu() is not None or self.textbox.is_open()

    def update(self, dt: float) -> bool:
        """Accumulate frame time and refresh the UI once enough has passed.

        Returns True if the textbox and bound variables were refreshed.
        """
        self._dt_accumulator += dt
        if self._dt_accumulator < UPDATE_INTERVAL:
            return False
        self.textbox.update(self._dt_accumulator)
        self.data_model.dirty_all_variables()
        self._dt_accumulator = 0.0
        return True