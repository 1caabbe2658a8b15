import pytest

from arpgkit.ui_bindings import TextboxBindings
from arpgkit.ui_textbox import (
    DEFAULT_TYPING_SOUND,
    Textbox,
    TextboxController,
    TextboxSprite,
    create_textbox_presets,
    is_plain,
    nth_plain,
    plain_count,
    presets_with_prefix,
    replace_graphical_plain_with_nbsp,
    sprite_name,
)


def test_is_plain_positions():
    rml = "a<b>c"
    assert [is_plain(rml, i) for i in range(len(rml))] == [True, False, False, False, True]


@pytest.mark.parametrize(
    "plain, rml",
    [
        ("Hello", "Hello"),
        ("You are dead!", "You are <span style='color: red'>dead</span>!"),
        ("ab", "a<br/>b"),
        ("", ""),
    ],
)
def test_plain_count_and_nth_plain_match_text_without_tags(plain, rml):
    assert plain_count(rml) == len(plain)
    assert "".join(nth_plain(rml, n) for n in range(plain_count(rml))) == plain
    assert nth_plain(rml, len(plain)) == ""


def test_replace_with_full_offset_is_identity():
    rml = "You are <span style='color: red'>deader than dead</span>!"
    assert replace_graphical_plain_with_nbsp(rml, plain_count(rml)) == rml


def test_replace_from_zero_keeps_spaces_and_tags():
    assert replace_graphical_plain_with_nbsp("ab c", 0) == "&nbsp;&nbsp; &nbsp;"
    assert replace_graphical_plain_with_nbsp("<br/>x", 0) == "<br/>&nbsp;"


def test_sprite_names():
    assert sprite_name(TextboxSprite.NONE) == ""
    assert sprite_name(TextboxSprite.SKULL) == "icon-skull"
    assert sprite_name(TextboxSprite.GOLDEN_KEY) == "icon-golden-key"


def test_presets_sorted_and_found_by_prefix():
    presets = create_textbox_presets(lambda: None, lambda: None)
    paths = [p.path for p in presets]
    assert paths == sorted(paths)
    assert [p.path for p in presets_with_prefix(presets, "player/die")] == ["player/die/0", "player/die/1"]
    assert [p.path for p in presets_with_prefix(presets, "player/die/1")] == ["player/die/1"]
    assert presets_with_prefix(presets, "nothing") == []
    assert presets[0].sprite is TextboxSprite.SKULL


def test_preset_options_callback():
    calls = []
    presets = create_textbox_presets(lambda: calls.append("restart"), lambda: calls.append("menu"))
    question = presets_with_prefix(presets, "player/die/1")[0]
    assert question.options == ["Yes", "No"]
    question.options_callback("Yes")
    question.options_callback("No")
    assert calls == ["restart", "menu"]


def _controller():
    sounds = []
    visibility = []
    controller = TextboxController(TextboxBindings(), sounds.append, visibility.append)
    return controller, sounds, visibility


def test_typing_out_text():
    controller, sounds, visibility = _controller()
    controller.open(Textbox(text="Hi", typing_speed=10.0))
    assert visibility == [True]
    assert controller.is_typing()
    controller.update(0.1)
    assert controller.bindings.text == replace_graphical_plain_with_nbsp("Hi", 1)
    assert sounds == ["event:/" + DEFAULT_TYPING_SOUND]
    controller.update(0.1)
    assert not controller.is_typing()
    controller.update(0.1)
    assert controller.bindings.text == "Hi"


def test_confirm_skips_typing_then_closes():
    controller, _, visibility = _controller()
    controller.open(Textbox(text="Hello there", sprite=TextboxSprite.SKULL))
    controller.on_confirm_key()
    assert controller.is_open() and not controller.is_typing()
    controller.update(0.0)
    assert controller.bindings.text == "Hello there"
    assert controller.bindings.sprite == "icon-skull"
    controller.on_confirm_key()
    assert not controller.is_open()
    assert controller.bindings == TextboxBindings()
    assert visibility == [True, False]


def test_queue_order():
    controller, _, _ = _controller()
    first, second = Textbox(path="a"), Textbox(path="b")
    controller.open_or_enqueue(first)
    controller.open_or_enqueue(second)
    assert controller.current is first
    assert len(controller) == 1
    assert controller.open_next_in_queue() is True
    assert controller.current is second
    assert controller.open_next_in_queue() is False
    assert not controller.is_open()


def test_options_selection_and_choice():
    controller, sounds, _ = _controller()
    chosen = []
    controller.open(Textbox(text="Again?", options=["Yes", "No"], options_callback=chosen.append))
    controller.skip_typing()
    controller.update(0.0)
    assert controller.bindings.has_options
    controller.on_up_key()
    assert controller.bindings.selected_option == 0
    controller.on_down_key()
    controller.on_down_key()
    assert controller.bindings.selected_option == 1
    assert sounds == ["event:/ui/snd_button_hover"]
    controller.on_confirm_key()
    assert chosen == ["No"]
    assert sounds[-1] == "event:/ui/snd_button_click"


def test_opening_sound_and_clear_queue():
    controller, sounds, _ = _controller()
    controller.open(Textbox(text="Key!", opening_sound="snd_item_fanfare"))
    assert sounds == ["event:/snd_item_fanfare"]
    controller.enqueue(Textbox(text="more"))
    controller.close_and_clear_queue()
    assert not controller.is_open()
    assert len(controller) == 0