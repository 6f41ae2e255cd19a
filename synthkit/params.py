"""Parameter controls: a scaled value with a default, a dial and a knob."""

from __future__ import annotations

import math
from contextlib import contextmanager
from enum import Enum
from typing import Callable, ClassVar, Iterator, Optional

_EPSILON = 0.0001

ValueHandler = Callable[[float], None]
IntHandler = Callable[[int], None]


class DialMode(Enum):
    """How dragging the pointer over a dial changes its value."""

    DEFAULT = 0   # absolute position from the pointer angle
    LINEAR = 1    # proportional to distance along the axes
    ANGULAR = 2   # relative rotation around the dial centre


class Param:
    """A float parameter with a range, a scale and a remembered default.

    The first value set becomes the default unless one was given. A value
    away from the default marks the control as ``highlighted`` while it is
    ``enabled``. ``on_value_changed(value)`` is called on real changes.
    """

    def __init__(self) -> None:
        self._value = 0.0
        self._minimum = 0.0
        self._maximum = 1.0
        self.scale = 1.0
        self.enabled = True
        self.highlighted = False
        self.on_value_changed: Optional[ValueHandler] = None
        self._default_value = 0.0
        self._default_count = 0

    @property
    def value(self) -> float:
        return self._value

    @property
    def minimum(self) -> float:
        return self._minimum

    @property
    def maximum(self) -> float:
        return self._maximum

    @property
    def default_value(self) -> float:
        return self._default_value

    def set_value(self, value: float) -> None:
        """Set the value, recording it as default if none is known yet."""
        highlighted = False
        if self._default_count == 0:
            self._default_value = value
            self._default_count += 1
        elif self.enabled and abs(value - self._default_value) > _EPSILON:
            highlighted = True
        self.highlighted = highlighted

        if abs(value - self._value) > _EPSILON:
            self._value = value
            if self.on_value_changed is not None:
                self.on_value_changed(self._value)

    def text(self) -> str:
        """Textual form of the value."""
        return f"{self._value:g}"

    def value_text(self) -> str:
        """Text describing the current value."""
        return f"{self._value:g}"

    def set_text(self, text: str) -> None:
        """Set the value from text; unparsable text gives zero."""
        try:
            parsed = float(text)
        except ValueError:
            parsed = 0.0
        self.set_value(parsed)

    def set_minimum(self, minimum: float) -> None:
        self._minimum = minimum

    def set_maximum(self, maximum: float) -> None:
        self._maximum = maximum

    def reset_default_value(self) -> None:
        """Forget the default so that the next value set becomes it."""
        self._default_value = 0.0
        self._default_count = 0

    def is_default_value(self) -> bool:
        """Whether a default value is known."""
        return self._default_count > 0

    def set_default_value(self, value: float) -> None:
        self._default_value = value
        self._default_count += 1

    def middle_click(self) -> None:
        """Return to the default, taking the mid-range if none is known."""
        if self._default_count < 1:
            self._default_value = 0.5 * (self._maximum + self._minimum)
            self._default_count += 1
        self.set_value(self._default_value)

    def scale_from_value(self, value: float) -> float:
        return self.scale * value

    def value_from_scale(self, scaled: float) -> float:
        return scaled / self.scale


class Dial:
    """Integer rotary control driven by pointer press, move and release.

    The drag behaviour is shared by all dials through ``Dial.mode``.
    """

    mode: ClassVar[DialMode] = DialMode.DEFAULT

    def __init__(self, width: int = 48, height: int = 48,
                 minimum: int = 0, maximum: int = 99) -> None:
        self.width = width
        self.height = height
        self.minimum = int(minimum)
        self.maximum = max(int(maximum), self.minimum)
        self.single_step = 1
        self._value = self.minimum
        self._pressed = False
        self._pos = (0, 0)
        self._last_drag = 0.0
        self._blocked = False
        self.on_value_changed: Optional[IntHandler] = None
        self.on_slider_pressed: Optional[Callable[[], None]] = None
        self.on_slider_moved: Optional[IntHandler] = None

    @classmethod
    def set_mode(cls, mode: DialMode) -> None:
        """Select the drag behaviour for every dial."""
        cls.mode = DialMode(mode)

    @property
    def value(self) -> int:
        return self._value

    @property
    def pressed(self) -> bool:
        return self._pressed

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Suppress value-change notification for the duration."""
        previous = self._blocked
        self._blocked = True
        try:
            yield
        finally:
            self._blocked = previous

    def set_value(self, value: float) -> None:
        """Set the value, truncated to an integer and clamped to the range."""
        clamped = max(self.minimum, min(self.maximum, int(value)))
        if clamped != self._value:
            self._value = clamped
            if not self._blocked and self.on_value_changed is not None:
                self.on_value_changed(clamped)

    def set_range(self, minimum: int, maximum: int) -> None:
        self.minimum = int(minimum)
        self.maximum = max(int(maximum), self.minimum)
        self.set_value(self._value)

    def set_minimum(self, minimum: float) -> None:
        minimum = int(minimum)
        self.set_range(minimum, max(self.maximum, minimum))

    def set_maximum(self, maximum: float) -> None:
        maximum = int(maximum)
        self.set_range(min(self.minimum, maximum), maximum)

    def mouse_angle(self, x: int, y: int) -> float:
        """Angle in degrees of a point, clockwise from straight up."""
        dx = float(x - (self.width >> 1))
        dy = float((self.height >> 1) - y)
        return math.degrees(math.atan2(dx, dy))

    def _value_from_point(self, x: int, y: int) -> int:
        angle = max(-135.0, min(135.0, self.mouse_angle(x, y)))
        span = self.maximum - self.minimum
        return self.minimum + int(round((angle + 135.0) / 270.0 * span))

    def press(self, x: int, y: int) -> None:
        """Left button pressed at a point."""
        self._pressed = True
        self._pos = (x, y)
        self._last_drag = float(self._value)
        if self.on_slider_pressed is not None:
            self.on_slider_pressed()
        if Dial.mode is DialMode.DEFAULT:
            self.set_value(self._value_from_point(x, y))

    def move(self, x: int, y: int) -> None:
        """Pointer dragged to a point while pressed."""
        if not self._pressed:
            return

        mode = Dial.mode
        if mode is DialMode.DEFAULT:
            new_value = self._value_from_point(x, y)
        elif mode is DialMode.LINEAR:
            dx = x - self._pos[0]
            dy = y - self._pos[1]
            new_value = int(self._last_drag) + dx - dy
        else:
            delta = self.mouse_angle(x, y) - self.mouse_angle(*self._pos)
            if delta > 180.0:
                delta -= 360.0
            elif delta < -180.0:
                delta += 360.0
            self._last_drag += float(self.maximum - self.minimum) * delta / 270.0
            self._last_drag = max(float(self.minimum),
                                  min(float(self.maximum), self._last_drag))
            self._pos = (x, y)
            new_value = int(self._last_drag + 0.5)

        self.set_value(new_value)
        if self.on_slider_moved is not None:
            self.on_slider_moved(self._value)

    def release(self) -> None:
        """Button released; ends any drag."""
        self._pressed = False


class Knob(Param):
    """A parameter shown as a labelled dial whose steps are scaled values."""

    def __init__(self) -> None:
        super().__init__()
        self.label = ""
        self.dial = Dial()
        self.dial.on_value_changed = self.dial_value_changed

    def set_text(self, text: str) -> None:
        self.label = text

    def text(self) -> str:
        return self.label

    def set_value(self, value: float) -> None:
        with self.dial.blocked():
            self.dial.set_value(self.scale_from_value(value))
            super().set_value(value)

    def set_maximum(self, maximum: float) -> None:
        super().set_maximum(maximum)
        self.dial.set_maximum(self.scale_from_value(maximum))

    def set_minimum(self, minimum: float) -> None:
        super().set_minimum(minimum)
        self.dial.set_minimum(self.scale_from_value(minimum))

    def set_single_step(self, step: float) -> None:
        self.dial.single_step = int(self.scale_from_value(step))

    @property
    def single_step(self) -> float:
        return self.value_from_scale(self.dial.single_step)

    def dial_value_changed(self, dial_value: int) -> None:
        """The dial moved: follow it with the unscaled value."""
        self.set_value(self.value_from_scale(dial_value))