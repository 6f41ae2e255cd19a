# synthkit

Pure-Python models of the pieces around a small synthesizer: parameter
smoothing, a piano keyboard, parameter controls, a status bar and colour
palettes stored as named themes. There are no runtime dependencies.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `synthkit.ramp` smooths parameter changes over a block of frames. `Ramp` is
  the abstract base (`probe` and `evaluate` to override); `PortRamp` follows any
  number of `Port` values given to `track(...)` and ramps toward their product.
  A new ramp starts in `process(nframes)` when a port moved by more than 0.001,
  and lasts at least 32 frames. `value(n, i)` reads the value at frame `n`.
- `synthkit.linked` provides an intrusive doubly linked list: `LinkedList`
  holds `ListNode` objects, with `append`, `remove` and iteration.
- `synthkit.keyboard` models a horizontal 128-key piano strip. `PianoKeyboard`
  computes key rectangles (`note_rect`), picks the note under a point
  (`note_at`), keeps lit notes (`note_on`, `note_off`, `all_notes_off`), and
  turns `mouse_press`, `mouse_move`, `mouse_release`, `escape` and `leave`
  into calls to `on_note_clicked(note, velocity)` and, when `note_range` is
  on, into edits of the playable range reported by `on_range_changed()`.
  `timeout_pending` tells the host to call `all_notes_timeout()` after
  `TIMEOUT_MSECS` milliseconds.
- `synthkit.params` has `Param` (a float value with range, scale and a
  remembered default), `Dial` (an integer rotary control whose drag behaviour
  is chosen by `Dial.set_mode` with a `DialMode`) and `Knob` (a `Param` driving
  a `Dial`).
- `synthkit.param_widgets` builds on those: `Spin` with its `SpinEdit` box
  (immediate or deferred reporting, see `EditMode`), `Combo`, `Radio`, `Check`
  and `ParamGroup`.
- `synthkit.status` has `StatusBar`, which holds the MIDI-in LED state, shows
  incoming notes on a `PianoKeyboard` and carries the "MOD" modified mark.
- `synthkit.palette` has `Color`, `ColorRole`, `ColorGroup` and `Palette`, and
  `PaletteSettings`, a mapping of slash-separated keys kept in an INI file.
  Named themes are stored and read with `save_named_palette`,
  `load_named_palette`, `save_named_palette_conf`, `load_named_palette_conf`,
  registered with `add_named_palette_conf` and `delete_named_palette_conf`,
  and listed with `named_palette_list`. `named_palette` loads a theme and, for
  a dark palette, derives the shading and disabled colours from the window
  colour unless `fixup` is true.
- `synthkit.palette_model` has `PaletteModel`, a table of one row per colour
  role and columns for the role name and the active, inactive and disabled
  colours, with `set_color`, `set_edited` and `reset_all`.

## Example

```python
from synthkit.ramp import Port, PortRamp
from synthkit.keyboard import PianoKeyboard
from synthkit.palette import Palette, PaletteSettings, save_named_palette, named_palette_list

gain = Port(0.5)
ramp = PortRamp(1)
ramp.track(gain)
gain.value = 1.0
ramp.process(64)
ramp.value(0, 0)    # 0.5
ramp.value(32, 0)   # 0.75

keys = PianoKeyboard(440, 22)
events = []
keys.on_note_clicked = lambda note, velocity: events.append((note, velocity))
keys.mouse_press(100, 5)
keys.mouse_release(100, 5)   # events holds a note-on then its note-off

with PaletteSettings("themes.conf") as settings:
    save_named_palette(settings, "Plain", Palette())
    named_palette_list(settings)   # ["Plain"]
```

## What it does not do

synthkit processes no audio: it has no oscillators, filters or sound output.
It draws nothing and opens no windows; the keyboard, controls, status bar and
palette editor are state models that a host user interface feeds with pointer
and key events and reads back. There is no command-line program.