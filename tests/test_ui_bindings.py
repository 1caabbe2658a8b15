import pytest

from arpgkit.ui_bindings import DataModel, HudBindings, TextboxBindings


def test_bound_variable_reads_current_value():
    hud = HudBindings()
    model = DataModel()
    model.bind("hud_player_health", lambda: hud.player_health)
    hud.player_health = 7
    assert model.get("hud_player_health") == 7
    hud.player_health = 3
    assert model.get("hud_player_health") == 3


def test_unknown_variable_raises():
    model = DataModel()
    with pytest.raises(KeyError):
        model.get("missing")
    with pytest.raises(KeyError):
        model.is_variable_dirty("missing")


def test_duplicate_binding_rejected():
    model = DataModel()
    model.bind("hud_arrow_ammo", lambda: 0)
    with pytest.raises(ValueError):
        model.bind("hud_arrow_ammo", lambda: 1)
    model.bind_event_callback("on_click_play", lambda: None)
    with pytest.raises(ValueError):
        model.bind_event_callback("on_click_play", lambda: None)


def test_dirty_tracking():
    model = DataModel()
    model.bind("hud_bomb_ammo", lambda: 0)
    model.bind("hud_rupee_amount", lambda: 0)
    assert model.is_variable_dirty("hud_bomb_ammo") is True
    model.clean()
    assert model.is_variable_dirty("hud_bomb_ammo") is False
    assert model.is_variable_dirty("hud_rupee_amount") is False
    model.dirty_all_variables()
    assert model.is_variable_dirty("hud_bomb_ammo") is True
    assert model.is_variable_dirty("hud_rupee_amount") is True


def test_fire_event_callback():
    calls = []
    model = DataModel()
    model.bind_event_callback("on_click_quit", lambda: calls.append("quit"))
    model.fire("on_click_quit")
    model.fire("on_click_quit")
    assert calls == ["quit", "quit"]
    with pytest.raises(KeyError):
        model.fire("on_click_nothing")


def test_textbox_bindings_clear():
    bindings = TextboxBindings(
        text="Hello", has_sprite=True, sprite="icon-skull",
        has_options=True, options=["Yes", "No"], selected_option=1,
    )
    bindings.clear()
    assert bindings == TextboxBindings()
    assert bindings.options == []