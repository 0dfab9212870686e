"""Panel widgets: progress bars, push buttons, dividers and text labels."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from shipshape.structure import text_size
from shipshape.ui import BAR_HEIGHT, BORDER, BUFFER, TTF_BOLD, TTF_REGULAR, Color, Rect

# Estimated descent of the 13pt panel font, added below a label's text.
LABEL_DESCENT = 3

STYLES = (TTF_REGULAR, TTF_BOLD)


class Widget:
    """Something stacked in a panel; placed in panel-interior coordinates."""

    bounds: Rect

    @property
    def height(self) -> int:
        return self.bounds.height()

    def left_mouse_button_press(self, x: int, y: int) -> bool:
        return False

    def left_mouse_button_release(self, x: int, y: int) -> bool:
        return False


class Bar(Widget):
    """A horizontal bar filled in proportion to a 0-255 value."""

    def __init__(
        self, x: int, y: int, w: int, source: Callable[[], int], color: Color
    ) -> None:
        self.source = source
        self.color = color
        self.value = 0
        self.bounds = Rect(x, y, x + w, y + BAR_HEIGHT)

    def refresh(self) -> int:
        """Read the current value from the source and return it."""
        value = self.source()
        if not 0 <= value <= 255:
            raise ValueError(f"bar value out of range: {value}")
        self.value = value
        return self.value

    def fill_width(self) -> int:
        """Width in pixels of the filled part of the bar."""
        return (self.value * self.bounds.width()) // 255


class ButtonState(Enum):
    PRESSED = "pressed"
    ACTIVE = "active"
    INACTIVE = "inactive"


class Button(Widget):
    """A button that runs its action when pressed and released over it.

    ``source`` says whether the button is currently usable.
    """

    def __init__(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        message: str,
        action: Callable[[], None],
        source: Callable[[], bool],
    ) -> None:
        self.action = action
        self.source = source
        self.message = message
        self.pressed = False
        self.active = bool(source())
        _, text_h = text_size(message)
        self.bounds = Rect(x, y, x + w, y + text_h + BUFFER * 2 + BORDER + 2)

    @property
    def state(self) -> ButtonState:
        if self.pressed:
            return ButtonState.PRESSED
        return ButtonState.ACTIVE if self.active else ButtonState.INACTIVE

    def refresh(self) -> ButtonState:
        """Re-read whether the button is usable and return how it shows."""
        self.active = bool(self.source())
        return self.state

    def left_mouse_button_press(self, x: int, y: int) -> bool:
        if not self.active:
            return False
        if self.bounds.contains(x, y):
            self.pressed = True
            return True
        return False

    def left_mouse_button_release(self, x: int, y: int) -> bool:
        if not self.active:
            return False
        if self.pressed:
            if self.bounds.contains(x, y):
                self.action()
                return True
            self.pressed = False
        return False


class Divider(Widget):
    """A thin horizontal rule."""

    def __init__(self, x: int, y: int, w: int) -> None:
        self.bounds = Rect(x, y, x + w, y + BORDER)


class Label(Widget):
    """A line of text whose content is read from ``source``."""

    def __init__(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        style: str,
        inverted: bool,
        source: Callable[[], str],
    ) -> None:
        if style not in STYLES:
            raise ValueError(f"unknown text style: {style!r}")
        self.style = style
        self.inverted = inverted
        self.source = source
        self.message = source()
        _, text_h = text_size(self.message)
        self.bounds = Rect(x, y, x + w, y + text_h + LABEL_DESCENT)

    def refresh(self) -> str:
        """Re-read the text from the source and return it."""
        self.message = self.source()
        return self.message