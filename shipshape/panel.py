"""The side panel: a vertical stack of widgets with a locked header."""

from __future__ import annotations

from collections.abc import Callable

from shipshape.ui import BORDER, BUFFER, PANEL_EXTERNAL_PADDING, PANEL_WIDTH, Color, Rect
from shipshape.widgets import Bar, Button, Divider, Label, Widget


def _panel_bounds(w: int, h: int) -> Rect:
    return Rect(
        w - PANEL_WIDTH - PANEL_EXTERNAL_PADDING,
        PANEL_EXTERNAL_PADDING,
        w - PANEL_EXTERNAL_PADDING,
        h - PANEL_EXTERNAL_PADDING,
    )


class Panel:
    """Widgets stacked top to bottom at the right of a w by h window.

    The first ``locked`` widgets survive :meth:`clear`.
    """

    def __init__(self, w: int, h: int) -> None:
        self.bounds = _panel_bounds(w, h)
        self.locked = 0
        self.elements: list[Widget] = []

    def _first_available_spot(self) -> int:
        return BUFFER + sum(element.height + BUFFER for element in self.elements)

    def add_bar(self, source: Callable[[], int], color: Color) -> Bar:
        bar = Bar(
            BUFFER,
            self._first_available_spot(),
            self.bounds.width() - BUFFER * 2 - BORDER * 2,
            source,
            color,
        )
        self.elements.append(bar)
        return bar

    def add_button(
        self, text: str, callback: Callable[[], None], source: Callable[[], bool]
    ) -> Button:
        spot = self._first_available_spot()
        button = Button(
            BUFFER,
            spot,
            self.bounds.width() - BUFFER * 2 - BORDER * 2,
            self.bounds.height() - spot - BUFFER * 2,
            text,
            callback,
            source,
        )
        self.elements.append(button)
        return button

    def add_divider(self) -> Divider:
        divider = Divider(0, self._first_available_spot(), self.bounds.width())
        self.elements.append(divider)
        return divider

    def _add_label(self, source: Callable[[], str], style: str, inverted: bool) -> Label:
        spot = self._first_available_spot()
        label = Label(
            0,
            spot,
            self.bounds.width(),
            self.bounds.height() - spot - BUFFER * 2,
            style,
            inverted,
            source,
        )
        self.elements.append(label)
        return label

    def add_inverted_label(self, source: Callable[[], str], style: str) -> Label:
        return self._add_label(source, style, True)

    def add_label(self, source: Callable[[], str], style: str) -> Label:
        return self._add_label(source, style, False)

    def clear(self) -> None:
        """Remove every widget below the locked ones."""
        del self.elements[self.locked:]

    def left_mouse_button_press(self, x: int, y: int) -> bool:
        """Pass a press inside the panel to its widgets; True if it was inside."""
        if not self.bounds.contains(x, y):
            return False
        for widget in list(self.elements):
            widget.left_mouse_button_press(x - self.bounds.min_x, y - self.bounds.min_y)
        return True

    def left_mouse_button_release(self, x: int, y: int) -> bool:
        """Pass a release to the widgets; a release outside cancels any press."""
        if self.bounds.contains(x, y):
            for widget in list(self.elements):
                widget.left_mouse_button_release(x - self.bounds.min_x, y - self.bounds.min_y)
            return True
        for widget in list(self.elements):
            widget.left_mouse_button_release(-1, -1)
        return False

    def lock(self, n: int) -> None:
        """Keep the first n widgets through clears, if there are that many."""
        if len(self.elements) >= n:
            self.locked = n

    def resize(self, w: int, h: int) -> None:
        self.bounds = _panel_bounds(w, h)