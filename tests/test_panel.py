from shipshape.panel import Panel
from shipshape.ui import (
    BUFFER,
    PANEL_EXTERNAL_PADDING,
    PANEL_WIDTH,
    TTF_REGULAR,
    Color,
)
from shipshape.widgets import Bar, Button, Divider, Label


def test_bounds_follow_window():
    panel = Panel(1024, 768)
    assert panel.bounds.width() == PANEL_WIDTH
    assert panel.bounds.max_x == 1024 - PANEL_EXTERNAL_PADDING
    assert panel.bounds.min_y == PANEL_EXTERNAL_PADDING
    assert panel.bounds.max_y == 768 - PANEL_EXTERNAL_PADDING


def test_resize_moves_bounds():
    panel = Panel(1024, 768)
    panel.resize(1600, 900)
    assert panel.bounds.max_x == 1600 - PANEL_EXTERNAL_PADDING
    assert panel.bounds.max_y == 900 - PANEL_EXTERNAL_PADDING
    assert panel.bounds.width() == PANEL_WIDTH


def test_widgets_stack_with_buffer():
    panel = Panel(1024, 768)
    label = panel.add_label(lambda: "hi", TTF_REGULAR)
    bar = panel.add_bar(lambda: 0, Color(1, 2, 3))
    divider = panel.add_divider()
    button = panel.add_button("ok", lambda: None, lambda: True)
    assert label.bounds.min_y == BUFFER
    for upper, lower in zip([label, bar, divider], [bar, divider, button]):
        assert lower.bounds.min_y == upper.bounds.max_y + BUFFER
    assert [type(e) for e in panel.elements] == [Label, Bar, Divider, Button]


def test_inverted_label():
    panel = Panel(1024, 768)
    label = panel.add_inverted_label(lambda: "title", TTF_REGULAR)
    assert label.inverted is True
    assert label.bounds.width() == panel.bounds.width()


def test_clear_keeps_locked_widgets():
    panel = Panel(1024, 768)
    for _ in range(3):
        panel.add_divider()
    panel.lock(2)
    panel.add_divider()
    panel.add_divider()
    panel.clear()
    assert len(panel.elements) == 2


def test_lock_beyond_length_is_ignored():
    panel = Panel(1024, 768)
    panel.add_divider()
    panel.lock(5)
    assert panel.locked == 0
    panel.add_divider()
    panel.clear()
    assert panel.elements == []


def test_press_outside_panel():
    panel = Panel(1024, 768)
    assert panel.left_mouse_button_press(0, 0) is False
    assert panel.left_mouse_button_release(0, 0) is False


def _click_point(panel, button):
    return (
        panel.bounds.min_x + button.bounds.min_x + 1,
        panel.bounds.min_y + button.bounds.min_y + 1,
    )


def test_button_click_through_panel():
    panel = Panel(1024, 768)
    calls = []
    button = panel.add_button("ok", lambda: calls.append("ok"), lambda: True)
    x, y = _click_point(panel, button)
    assert panel.left_mouse_button_press(x, y) is True
    assert button.pressed is True
    assert panel.left_mouse_button_release(x, y) is True
    assert calls == ["ok"]


def test_release_outside_panel_cancels_press():
    panel = Panel(1024, 768)
    calls = []
    button = panel.add_button("ok", lambda: calls.append("ok"), lambda: True)
    panel.left_mouse_button_press(*_click_point(panel, button))
    assert panel.left_mouse_button_release(0, 0) is False
    assert button.pressed is False
    assert calls == []


def test_action_that_rebuilds_panel():
    panel = Panel(1024, 768)
    panel.add_divider()
    panel.lock(1)

    def rebuild():
        panel.clear()
        panel.add_label(lambda: "new", TTF_REGULAR)

    button = panel.add_button("rebuild", rebuild, lambda: True)
    x, y = _click_point(panel, button)
    panel.left_mouse_button_press(x, y)
    assert panel.left_mouse_button_release(x, y) is True
    assert [type(e) for e in panel.elements] == [Divider, Label]