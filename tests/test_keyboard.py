import pytest

from synthkit.keyboard import (
    MAX_NOTE,
    MAX_VELOCITY,
    MIN_NOTE,
    MIN_VELOCITY,
    DragState,
    PianoKeyboard,
)


@pytest.fixture
def kb():
    keyboard = PianoKeyboard(1280, 30)
    keyboard.events = []
    keyboard.ranges = []
    keyboard.on_note_clicked = lambda n, v: keyboard.events.append((n, v))
    keyboard.on_range_changed = lambda: keyboard.ranges.append(True)
    return keyboard


def test_velocity_default_and_clamp(kb):
    assert kb.velocity == (MIN_VELOCITY + MAX_VELOCITY) // 2
    kb.set_velocity(0)
    assert kb.velocity == MIN_VELOCITY
    kb.set_velocity(500)
    assert kb.velocity == MAX_VELOCITY


def test_note_at_upper_region_is_uniform(kb):
    for note in (0, 1, 60, 127):
        assert kb.note_at(note * 10 + 5, 0) == note


def test_note_at_lower_region_resolves_black_key(kb):
    # Below the black keys, a black-key column belongs to a neighbour.
    assert kb.note_at(12, 29) == kb.note_at(5, 29)
    assert kb.note_at(17, 29) == kb.note_at(25, 0)


def test_black_key_shorter_than_white(kb):
    black = kb.note_rect(1)
    white = kb.note_rect(0)
    assert black.height < white.height
    assert white.height == kb.height
    assert black.top == 0


def test_rect_edges(kb):
    r = kb.note_rect(0, True)
    assert r.right == r.left + r.width - 1
    assert r.bottom == r.height - 1


def test_safe_range(kb):
    kb.set_note_high(60)
    kb.set_note_low(80)
    assert kb.note_low == 60
    kb.set_note_low(-5)
    assert kb.note_low == MIN_NOTE
    kb.set_note_high(300)
    assert kb.note_high == MAX_NOTE


def test_note_on_respects_range(kb):
    kb.set_note_low(40)
    kb.note_on(30)
    kb.note_on(50)
    assert kb.notes_on == [50]
    kb.all_notes_off()
    assert kb.notes_on == []


def test_note_key(kb):
    kb.set_note_key(64)
    assert kb.note_key == 64
    kb.set_note_key(200)
    assert kb.note_key == -1


def test_press_and_release_emit(kb):
    kb.mouse_press(605, 0)
    assert kb.events == [(60, kb.velocity)]
    assert kb.timeout_pending
    kb.mouse_release(605, 0)
    assert kb.events[-1] == (60, 0)
    assert kb.drag_state is DragState.NONE


def test_drag_moves_between_notes(kb):
    kb.mouse_press(605, 0)
    kb.mouse_move(615, 0)
    assert kb.events == [(60, kb.velocity), (60, 0), (61, kb.velocity)]


def test_leave_releases(kb):
    kb.mouse_press(605, 0)
    kb.leave()
    assert kb.events[-1] == (60, 0)
    assert kb.note_on_current == -1


def test_tooltip_uses_namer():
    keyboard = PianoKeyboard(1280, 30, note_namer=lambda n: f"N{n}")
    keyboard.mouse_press(605, 0)
    assert keyboard.tooltip == "N60 (60)"


def test_timeout_kills_dangling(kb):
    kb.mouse_press(605, 0)
    kb.note_on(72)
    kb.all_notes_timeout()
    assert kb.timeout_pending
    assert kb.is_note_on(72)
    kb.mouse_release(605, 0)
    kb.all_notes_timeout()
    assert not kb.is_note_on(72)
    assert kb.events[-1] == (72, 0)
    assert kb.timeout == 0


def test_drag_high_edge(kb):
    kb.note_range = True
    x = kb.note_high_x
    kb.mouse_move(x, 5)
    assert kb.drag_cursor is DragState.NOTE_HIGH
    kb.mouse_press(x, 5)
    assert kb.drag_state is DragState.NOTE_HIGH
    kb.mouse_release(640, 5)
    assert kb.note_high == kb.note_at(640, 5)
    assert kb.ranges == [True]


def test_rubber_band_range(kb):
    kb.note_range = True
    kb.mouse_press(100, 5, modified=True)
    assert kb.events == []
    kb.mouse_move(300, 5, modified=True)
    assert kb.drag_state is DragState.NOTE_RANGE
    kb.mouse_release(300, 5)
    assert kb.note_low == kb.note_at(100, 0)
    assert kb.note_high == kb.note_at(300, 0)
    assert kb.note_low_x == kb.note_rect(kb.note_low).left
    assert len(kb.ranges) == 1


def test_escape_resets(kb):
    kb.mouse_press(605, 0)
    kb.escape()
    assert kb.drag_state is DragState.NONE
    assert kb.events[-1] == (60, 0)


def test_invalid_size():
    with pytest.raises(ValueError):
        PianoKeyboard(0, 10)