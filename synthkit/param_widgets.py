"""Specialised parameter controls: spin box, combo box, radio, check and group."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator, Optional, Sequence

from .params import Knob, Param, ValueHandler


def _iroundf(x: float) -> int:
    """Round half away from zero."""
    return int(x - 0.5) if x < 0.0 else int(x + 0.5)


class EditMode(Enum):
    """When a spin box reports value changes."""

    DEFAULT = 0   # immediately on every change
    DEFERRED = 1  # only once editing is finished


class SpinEdit:
    """Numeric entry box with optionally deferred change notification.

    ``on_value_changed_ex(value)`` is the notification; ``SpinEdit.mode`` is
    shared by every spin box.
    """

    mode: ClassVar[EditMode] = EditMode.DEFAULT

    def __init__(self) -> None:
        self._minimum = 0.0
        self._maximum = 99.99
        self._value = 0.0
        self.decimals = 2
        self.single_step = 1.0
        self.special_value_text = ""
        self._text_changed = 0
        self._blocked = False
        self.on_value_changed_ex: Optional[ValueHandler] = None

    @classmethod
    def set_mode(cls, mode: EditMode) -> None:
        """Select the edit behaviour for every spin box."""
        cls.mode = EditMode(mode)

    @property
    def value(self) -> float:
        return self._value

    @property
    def minimum(self) -> float:
        return self._minimum

    @property
    def maximum(self) -> float:
        return self._maximum

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Suppress change notification for the duration."""
        previous = self._blocked
        self._blocked = True
        try:
            yield
        finally:
            self._blocked = previous

    def set_value(self, value: float) -> None:
        """Set the value, rounded to the decimals and clamped to the range."""
        value = round(max(self._minimum, min(self._maximum, float(value))), self.decimals)
        if value != self._value:
            self._value = value
            if not self._blocked:
                self.value_changed(value)

    def set_minimum(self, minimum: float) -> None:
        self._minimum = float(minimum)
        self._maximum = max(self._maximum, self._minimum)
        self.set_value(self._value)

    def set_maximum(self, maximum: float) -> None:
        self._maximum = float(maximum)
        self._minimum = min(self._minimum, self._maximum)
        self.set_value(self._value)

    def _emit(self, value: float) -> None:
        if self.on_value_changed_ex is not None:
            self.on_value_changed_ex(value)

    def text_changed(self, text: str) -> None:
        """The typed text changed."""
        if SpinEdit.mode is EditMode.DEFERRED:
            self._text_changed += 1

    def editing_finished(self) -> None:
        """Editing ended: report the value in deferred mode."""
        if SpinEdit.mode is EditMode.DEFERRED:
            self._text_changed = 0
            self._emit(self._value)

    def value_changed(self, value: float) -> None:
        """The value changed: report it unless deferred typing is pending."""
        if SpinEdit.mode is not EditMode.DEFERRED or self._text_changed == 0:
            self._emit(value)

    def is_acceptable(self, acceptable: bool) -> bool:
        """Refine a validation result: deferred input stays intermediate until typed."""
        if acceptable and SpinEdit.mode is EditMode.DEFERRED and self._text_changed == 0:
            return False
        return acceptable


class Spin(Knob):
    """A knob paired with a spin box showing the value in percent."""

    def __init__(self) -> None:
        super().__init__()
        self.spin_box = SpinEdit()
        self.scale = 100.0
        self.set_minimum(0.0)
        self.set_maximum(1.0)
        self.set_decimals(1)
        self.spin_box.on_value_changed_ex = self.spin_value_changed

    def set_value(self, value: float) -> None:
        with self.spin_box.blocked():
            self.spin_box.set_value(self.scale_from_value(value))
            super().set_value(value)

    def set_maximum(self, maximum: float) -> None:
        self.spin_box.set_maximum(self.scale_from_value(maximum))
        super().set_maximum(maximum)

    def set_minimum(self, minimum: float) -> None:
        self.spin_box.set_minimum(self.scale_from_value(minimum))
        super().set_minimum(minimum)

    def value_text(self) -> str:
        return f"{self.spin_box.value:.1f}"

    @property
    def special_value_text(self) -> str:
        return self.spin_box.special_value_text

    @special_value_text.setter
    def special_value_text(self, text: str) -> None:
        self.spin_box.special_value_text = text

    def is_special_value(self) -> bool:
        """Whether the spin box sits at its minimum."""
        return self.spin_box.minimum >= self.spin_box.value

    @property
    def decimals(self) -> int:
        return self.spin_box.decimals

    def set_decimals(self, decimals: int) -> None:
        self.spin_box.decimals = decimals
        self.spin_box.single_step = 10.0 ** -float(decimals)
        self.set_single_step(0.1)

    def spin_value_changed(self, spin_value: float) -> None:
        """The spin box changed: follow it with the unscaled value."""
        Knob.set_value(self, self.value_from_scale(float(spin_value)))


class Combo(Knob):
    """A knob paired with a list of named choices."""

    def __init__(self) -> None:
        super().__init__()
        self.items: list[str] = []
        self.current_index = -1

    def set_value(self, value: float) -> None:
        index = _iroundf(value)
        self.current_index = index if 0 <= index < len(self.items) else -1
        super().set_value(value)

    def value_text(self) -> str:
        if 0 <= self.current_index < len(self.items):
            return self.items[self.current_index]
        return ""

    def _update_range(self) -> None:
        self.set_minimum(0.0)
        self.set_maximum(float(len(self.items) - 1) if self.items else 1.0)
        self.set_single_step(1.0)

    def insert_items(self, index: int, items: Sequence[str]) -> None:
        """Insert choices at a position and widen the range to match."""
        index = max(0, min(index, len(self.items)))
        was_empty = not self.items
        self.items[index:index] = list(items)
        if was_empty and self.items:
            self.current_index = 0
        elif self.current_index >= index:
            self.current_index += len(items)
        self._update_range()

    def clear(self) -> None:
        self.items.clear()
        self.current_index = -1
        self._update_range()

    def activated(self, index: int) -> None:
        """A choice was picked from the list."""
        self.current_index = index
        Knob.set_value(self, float(index))

    def wheel(self, angle_delta: int) -> None:
        """Step through the choices by whole wheel notches."""
        delta = int(angle_delta / 120)
        if delta:
            value = max(self.minimum, min(self.maximum, self.value + float(delta)))
            self.set_value(value)


@dataclass
class _RadioButton:
    text: str
    tool_tip: str


class Radio(Param):
    """A parameter chosen among a group of exclusive buttons."""

    def __init__(self) -> None:
        super().__init__()
        self.tool_tip = ""
        self._buttons: dict[int, _RadioButton] = {}
        self.checked: Optional[int] = None

    @property
    def buttons(self) -> dict[int, str]:
        return {i: b.text for i, b in self._buttons.items()}

    def button_tool_tip(self, index: int) -> str:
        return self._buttons[index].tool_tip

    def set_value(self, value: float) -> None:
        index = _iroundf(value)
        if index in self._buttons:
            super().set_value(float(index))
            self.checked = index

    def value_text(self) -> str:
        button = self._buttons.get(_iroundf(self.value))
        return button.text if button is not None else ""

    def insert_items(self, index: int, items: Sequence[str]) -> None:
        """Add one button per item, numbered from ``index``."""
        for offset, text in enumerate(items):
            self._buttons[index + offset] = _RadioButton(text, f"{self.tool_tip}: {text}")
        self.set_minimum(0.0)
        count = len(self._buttons)
        self.set_maximum(float(count - 1) if count else 1.0)

    def clear(self) -> None:
        self._buttons.clear()
        self.checked = None
        self.set_minimum(0.0)
        self.set_maximum(1.0)

    def button_clicked(self, index: int) -> None:
        """A button was clicked."""
        if index not in self._buttons:
            raise ValueError(f"no radio button {index}")
        self.checked = index
        super().set_value(float(index))


class Check(Param):
    """A parameter toggled between its minimum and maximum."""

    def __init__(self) -> None:
        super().__init__()
        self.label = ""
        self.checked = False

    def set_text(self, text: str) -> None:
        self.label = text

    def text(self) -> str:
        return self.label

    def set_value(self, value: float) -> None:
        checked = value > 0.5 * (self.maximum + self.minimum)
        super().set_value(self.maximum if checked else self.minimum)
        self.checked = checked

    def toggled(self, checked: bool) -> None:
        """The box was toggled by the user."""
        self.checked = checked
        Param.set_value(self, self.maximum if checked else self.minimum)


class ParamGroup:
    """A checkable group whose check state mirrors a parameter."""

    def __init__(self) -> None:
        self.checked = True
        self.param = Param()
        self.param.set_value(0.5)  # half-way: neither on nor off yet
        self.param.on_value_changed = self._param_value_changed

    def _param_value_changed(self, value: float) -> None:
        self.checked = value > 0.5 * (self.param.maximum + self.param.minimum)

    def toggled(self, checked: bool) -> None:
        """The group was toggled by the user."""
        self.checked = checked
        self.param.set_value(self.param.maximum if checked else self.param.minimum)