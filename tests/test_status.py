from synthkit.keyboard import PianoKeyboard
from synthkit.status import StatusBar


def test_midi_in_note_on_and_off():
    status = StatusBar()
    status.midi_in_note(60, 100)
    assert status.keyboard.is_note_on(60) is True
    status.midi_in_note(60, 0)
    assert status.keyboard.is_note_on(60) is False


def test_uses_given_keyboard():
    keyboard = PianoKeyboard(440, 22)
    status = StatusBar(keyboard)
    status.midi_in_note(64, 90)
    assert keyboard.notes_on == [64]


def test_note_outside_range_ignored():
    keyboard = PianoKeyboard(440, 22)
    keyboard.set_note_high(70)
    status = StatusBar(keyboard)
    status.midi_in_note(80, 100)
    assert keyboard.notes_on == []


def test_midi_in_led():
    status = StatusBar()
    status.midi_in_led(True)
    assert status.led_on is True
    status.midi_in_led(False)
    assert status.led_on is False


def test_modified_flag():
    status = StatusBar()
    status.modified(True)
    assert status.modified_text == "MOD"
    status.modified(False)
    assert status.modified_text == ""