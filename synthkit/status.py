"""Status bar state: MIDI input LED, keyboard display and modified flag."""

from __future__ import annotations

from typing import Optional

from .keyboard import PianoKeyboard


class StatusBar:
    """Status bar holding a MIDI-in LED, a keyboard and a modification mark."""

    MODIFIED_TEXT = "MOD"

    def __init__(self, keyboard: Optional[PianoKeyboard] = None) -> None:
        self.keyboard = keyboard if keyboard is not None else PianoKeyboard(760, 22)
        self.led_on = False
        self.modified_text = ""

    def midi_in_led(self, on: bool) -> None:
        """Light or dim the MIDI input LED."""
        self.led_on = bool(on)

    def midi_in_note(self, note: int, velocity: int) -> None:
        """Show an incoming note on the keyboard; velocity 0 is note-off."""
        if velocity > 0:
            self.keyboard.note_on(note)
        else:
            self.keyboard.note_off(note)

    def modified(self, flag: bool) -> None:
        """Show or clear the modification mark."""
        self.modified_text = self.MODIFIED_TEXT if flag else ""