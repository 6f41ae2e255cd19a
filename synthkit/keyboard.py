"""Horizontal piano keyboard: key geometry, note picking and drag state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

NUM_NOTES = 128
MIN_NOTE = 0
MAX_NOTE = 127
MIN_VELOCITY = 1
MAX_VELOCITY = 127

START_DRAG_DISTANCE = 10
TIMEOUT_MSECS = 1200

_RANGE_GRIP = 4


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend."""
    return a - b * _cdiv(a, b)


def _qround(v: float) -> int:
    return int(v + 0.5) if v >= 0.0 else int(v - 0.5)


@dataclass(frozen=True)
class Rect:
    """Integer rectangle; right and bottom are inclusive edges."""

    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1


class DragState(Enum):
    """What a mouse drag over the keyboard is doing."""

    NONE = 0
    START = 1
    NOTE_RANGE = 2
    NOTE_LOW = 3
    NOTE_HIGH = 4


NoteHandler = Callable[[int, int], None]
RangeHandler = Callable[[], None]


class PianoKeyboard:
    """Model of a 128-key piano strip that turns pointer input into note events.

    ``on_note_clicked(note, velocity)`` is called for keyed notes (velocity 0
    for note-off) and ``on_range_changed()`` when the playable range is edited.
    ``timeout_pending`` tells the host to call ``all_notes_timeout`` after
    ``TIMEOUT_MSECS``.
    """

    def __init__(self, width: int = 440, height: int = 22,
                 note_namer: Optional[Callable[[int], str]] = None) -> None:
        self._note_namer = note_namer or str
        self.on_note_clicked: Optional[NoteHandler] = None
        self.on_range_changed: Optional[RangeHandler] = None

        self._on = [False] * NUM_NOTES
        self.drag_state = DragState.NONE
        self.drag_cursor = DragState.NONE
        self.cursor_resize = False
        self._pos_drag = (0, 0)

        self.note_range = False
        self.note_low = MIN_NOTE
        self.note_low_x = 0
        self.note_high = MAX_NOTE
        self.note_high_x = 0

        self.note_on_current = -1
        self.timeout = 0
        self.timeout_pending = False
        self.velocity = (MIN_VELOCITY + MAX_VELOCITY) // 2
        self.note_key = -1
        self.tooltip = ""

        self.width = 0
        self.height = 0
        self.resize(width, height)
        self.reset_drag_state()

    # -- geometry ---------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        """Change the keyboard size and recompute the range edges."""
        if width <= 0 or height <= 0:
            raise ValueError("keyboard size must be positive")
        self.width = width
        self.height = height
        if width < 4 or height < 4:
            return
        self.note_low_x = self.note_rect(self.note_low).left
        self.note_high_x = self.note_rect(self.note_high).right

    def note_rect(self, note: int, on: bool = False) -> Rect:
        """Bounding rectangle of a key; ``on`` gives the full lit white key."""
        w, h = self.width, self.height
        wn = float(w - 4) / float(NUM_NOTES)
        wk = 12.0 * wn / 7.0

        k = _cmod(note, 12)
        if k >= 5:
            k += 1

        nk = _cdiv(note, 12) * 7 + (k >> 1)
        x2 = int(wk * float(nk))
        w2 = int(wn + 0.5)

        if k & 1:
            return Rect(x2 + int(wk - float(w2 >> 1)), 0, w2 + 1, (h << 1) // 3)
        if on:
            return Rect(x2, 0, _qround(x2 + wk) - x2, h)
        return Rect(x2, 0, w2 << 1, h)

    def note_at(self, x: int, y: int) -> int:
        """Note under a point; may lie outside the valid note range."""
        w, h = self.width, self.height
        yk = (h << 1) // 3
        note = _cdiv(NUM_NOTES * x, w)
        if y >= yk:
            k = _cmod(note, 12)
            if k >= 5:
                k += 1
            if k & 1:
                xk = _cdiv((w * note) + (w >> 1), NUM_NOTES)
                if x >= xk:
                    note += 1
                else:
                    note -= 1
        return note

    # -- settings ---------------------------------------------------------

    def set_velocity(self, velocity: int) -> None:
        """Set the note-on velocity, clamped to the MIDI range."""
        self.velocity = max(MIN_VELOCITY, min(MAX_VELOCITY, velocity))

    def safe_note_low(self, note: int) -> int:
        """Clamp a low bound between MIN_NOTE and the current high bound."""
        return min(max(note, MIN_NOTE), self.note_high)

    def safe_note_high(self, note: int) -> int:
        """Clamp a high bound between the current low bound and MAX_NOTE."""
        return max(min(note, MAX_NOTE), self.note_low)

    def set_note_low(self, note: int) -> None:
        self.note_low = self.safe_note_low(note)
        self.note_low_x = self.note_rect(self.note_low).left

    def set_note_high(self, note: int) -> None:
        self.note_high = self.safe_note_high(note)
        self.note_high_x = self.note_rect(self.note_high).right

    def set_note_key(self, note: int) -> None:
        """Highlight a note, or clear the highlight for an invalid one."""
        self.note_key = note if MIN_NOTE <= note <= MAX_NOTE else -1

    # -- note display -----------------------------------------------------

    def is_note_on(self, note: int) -> bool:
        return self._on[note]

    @property
    def notes_on(self) -> list[int]:
        return [n for n, on in enumerate(self._on) if on]

    def note_on(self, note: int) -> None:
        """Light a key within the playable range."""
        if note < self.note_low or note > self.note_high:
            return
        self._on[note] = True

    def note_off(self, note: int) -> None:
        """Unlight a key within the playable range."""
        if note < self.note_low or note > self.note_high:
            return
        self._on[note] = False

    def all_notes_off(self) -> None:
        for n in range(NUM_NOTES):
            self.note_off(n)

    def all_notes_timeout(self) -> None:
        """Kill dangling lit notes unless a note is still being keyed."""
        self.timeout_pending = False
        if self.timeout < 1:
            return
        if self.note_on_current >= 0:
            self.timeout += 1
            self.timeout_pending = True
            return
        for n in range(NUM_NOTES):
            if self._on[n]:
                self._on[n] = False
                self._emit_note(n, 0)
        self.timeout = 0

    # -- keying -----------------------------------------------------------

    def _emit_note(self, note: int, velocity: int) -> None:
        if self.on_note_clicked is not None:
            self.on_note_clicked(note, velocity)

    def _emit_range(self) -> None:
        if self.on_range_changed is not None:
            self.on_range_changed()

    def drag_note_on(self, x: int, y: int) -> None:
        """Key the note under the point, releasing any previous one."""
        note = self.note_at(x, y)
        if note < self.note_low or note > self.note_high or note == self.note_on_current:
            return
        self.drag_note_off()
        self.note_on_current = note
        self._emit_note(note, self.velocity)
        self.timeout += 1
        if self.timeout == 1:
            self.timeout_pending = True

    def drag_note_off(self) -> None:
        """Release the currently keyed note, if any."""
        if self.note_on_current < 0:
            return
        note = self.note_on_current
        self.note_on_current = -1
        self._emit_note(note, 0)

    def _note_name(self, note: int) -> str:
        return self._note_namer(note)

    def _note_tool_tip(self, x: int, y: int) -> None:
        note = self.note_at(x, y)
        if note < MIN_NOTE or note > MAX_NOTE:
            return
        self.tooltip = f"{self._note_name(note)} ({note})"

    def _range_from(self, x: int, y: int) -> tuple[int, int]:
        left = min(self._pos_drag[0], x)
        right = max(self._pos_drag[0], x)
        return _cdiv(NUM_NOTES * left, self.width), _cdiv(NUM_NOTES * right, self.width)

    # -- pointer and key events ------------------------------------------

    def mouse_press(self, x: int, y: int, modified: bool = False) -> None:
        """Left button press; ``modified`` is Shift or Control held."""
        if self.drag_cursor is DragState.NONE:
            if not modified:
                self.drag_note_on(x, y)
                self._note_tool_tip(x, y)
            self.drag_state = DragState.START
            self._pos_drag = (x, y)
        else:
            self.drag_state = self.drag_cursor

    def mouse_move(self, x: int, y: int, modified: bool = False) -> None:
        state = self.drag_state
        if state is DragState.NONE:
            if self.note_range:
                if abs(self.note_high_x - x) < _RANGE_GRIP:
                    self.drag_cursor = DragState.NOTE_HIGH
                    self.cursor_resize = True
                    self.tooltip = (f"High: {self._note_name(self.note_high)}"
                                    f" ({self.note_high})")
                elif abs(self.note_low_x - x) < _RANGE_GRIP:
                    self.drag_cursor = DragState.NOTE_LOW
                    self.cursor_resize = True
                    self.tooltip = (f"Low: {self._note_name(self.note_low)}"
                                    f" ({self.note_low})")
                elif self.drag_cursor is not DragState.NONE:
                    self.drag_cursor = DragState.NONE
                    self.cursor_resize = False
        elif state is DragState.NOTE_LOW:
            if self.note_range:
                low = self.safe_note_low(self.note_at(x, y))
                self.note_low_x = self.note_rect(low).left
                self.tooltip = f"Low: {self._note_name(low)} ({low})"
        elif state is DragState.NOTE_HIGH:
            if self.note_range:
                high = self.safe_note_high(self.note_at(x, y))
                self.note_high_x = self.note_rect(high).right
                self.tooltip = f"High: {self._note_name(high)} ({high})"
        elif state is DragState.NOTE_RANGE:
            if self.note_range:
                low, high = self._range_from(x, y)
                low = max(low, MIN_NOTE)
                low = min(low, high)
                high = min(high, MAX_NOTE)
                high = max(high, low)
                self.note_low_x = self.note_rect(low).left
                self.note_high_x = self.note_rect(high).right
                self.tooltip = (f"Low: {self._note_name(low)} ({low})"
                                f" High: {self._note_name(high)} ({high})")
        elif state is DragState.START:
            if self.note_range:
                dist = abs(self._pos_drag[0] - x) + abs(self._pos_drag[1] - y)
                if dist > START_DRAG_DISTANCE:
                    if self.drag_cursor is not DragState.NONE:
                        self.drag_state = self.drag_cursor
                    elif modified:
                        self.drag_state = self.drag_cursor = DragState.NOTE_RANGE
                        self.cursor_resize = True
            if self.drag_state is DragState.START:
                self.drag_note_on(x, y)
                self._note_tool_tip(x, y)

    def mouse_release(self, x: int, y: int) -> None:
        state = self.drag_state
        if state is DragState.NOTE_LOW:
            if self.note_range:
                self.set_note_low(self.note_at(x, y))
                self._emit_range()
        elif state is DragState.NOTE_HIGH:
            if self.note_range:
                self.set_note_high(self.note_at(x, y))
                self._emit_range()
        elif state is DragState.NOTE_RANGE:
            if self.note_range:
                low, high = self._range_from(x, y)
                low = max(low, MIN_NOTE)
                high = min(high, MAX_NOTE)
                low = min(low, high)
                high = max(high, low)
                self.note_low = low
                self.note_low_x = self.note_rect(low).left
                self.note_high = high
                self.note_high_x = self.note_rect(high).right
                self._emit_range()
        self.reset_drag_state()

    def escape(self) -> None:
        """Escape key: abandon any drag."""
        self.reset_drag_state()

    def leave(self) -> None:
        """Pointer left the keyboard: release the keyed note."""
        self.drag_note_off()

    def reset_drag_state(self) -> None:
        self.drag_note_off()
        self.cursor_resize = False
        self.drag_state = self.drag_cursor = DragState.NONE