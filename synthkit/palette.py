"""Colour palettes and their storage as named themes in INI settings files."""

from __future__ import annotations

import colorsys
import configparser
import os
from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterator, Optional, Union

COLOR_THEMES_GROUP = "ColorThemes"

SettingsValue = Union[str, list]


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit components."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b, self.a):
            if not 0 <= component <= 255:
                raise ValueError(f"colour component out of range: {component}")

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """Parse ``#rgb``, ``#rrggbb``, ``#aarrggbb`` or a basic colour name."""
        text = name.strip().lower()
        if text in _NAMED_COLORS:
            return _NAMED_COLORS[text]
        if not text.startswith("#"):
            raise ValueError(f"invalid colour name: {name!r}")
        digits = text[1:]
        try:
            if len(digits) == 3:
                r, g, b = (int(d, 16) * 17 for d in digits)
                return cls(r, g, b)
            if len(digits) == 6:
                return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
            if len(digits) == 8:
                return cls(int(digits[2:4], 16), int(digits[4:6], 16),
                           int(digits[6:8], 16), int(digits[0:2], 16))
        except ValueError:
            pass
        raise ValueError(f"invalid colour name: {name!r}")

    def name(self) -> str:
        """The ``#rrggbb`` form of the colour."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def value(self) -> int:
        """HSV value (brightness) in the range 0-255."""
        return max(self.r, self.g, self.b)

    def lighter(self, factor: int = 150) -> "Color":
        """A lighter colour; a factor below 100 darkens instead."""
        if factor <= 0:
            return self
        if factor < 100:
            return self.darker(10000 // factor)
        h, s, v = colorsys.rgb_to_hsv(self.r / 255.0, self.g / 255.0, self.b / 255.0)
        v = v * factor / 100.0
        if v > 1.0:
            s = max(0.0, s - (v - 1.0))
            v = 1.0
        return self._from_hsv(h, s, v)

    def darker(self, factor: int = 200) -> "Color":
        """A darker colour; a factor below 100 lightens instead."""
        if factor <= 0:
            return self
        if factor < 100:
            return self.lighter(10000 // factor)
        h, s, v = colorsys.rgb_to_hsv(self.r / 255.0, self.g / 255.0, self.b / 255.0)
        return self._from_hsv(h, s, v * 100.0 / factor)

    def _from_hsv(self, h: float, s: float, v: float) -> "Color":
        r, g, b = colorsys.hsv_to_rgb(h, s, v)
        return Color(*(min(255, int(c * 255.0 + 0.5)) for c in (r, g, b)), self.a)

    def mixed(self, other: "Color") -> "Color":
        """Average of two colours."""
        return Color((self.r + other.r) // 2, (self.g + other.g) // 2,
                     (self.b + other.b) // 2, (self.a + other.a) // 2)


_NAMED_COLORS = {
    "black": Color(0, 0, 0),
    "white": Color(255, 255, 255),
    "red": Color(255, 0, 0),
    "green": Color(0, 128, 0),
    "blue": Color(0, 0, 255),
    "yellow": Color(255, 255, 0),
    "cyan": Color(0, 255, 255),
    "magenta": Color(255, 0, 255),
    "gray": Color(128, 128, 128),
    "grey": Color(128, 128, 128),
    "darkgray": Color(169, 169, 169),
    "lightgray": Color(211, 211, 211),
    "transparent": Color(0, 0, 0, 0),
}


class ColorRole(IntEnum):
    """The use a palette colour is put to."""

    WINDOW_TEXT = 0
    BUTTON = 1
    LIGHT = 2
    MIDLIGHT = 3
    DARK = 4
    MID = 5
    TEXT = 6
    BRIGHT_TEXT = 7
    BUTTON_TEXT = 8
    BASE = 9
    WINDOW = 10
    SHADOW = 11
    HIGHLIGHT = 12
    HIGHLIGHTED_TEXT = 13
    LINK = 14
    LINK_VISITED = 15
    ALTERNATE_BASE = 16
    NO_ROLE = 17
    TOOL_TIP_BASE = 18
    TOOL_TIP_TEXT = 19
    PLACEHOLDER_TEXT = 20


class ColorGroup(IntEnum):
    """The widget state a palette colour applies to."""

    ACTIVE = 0
    DISABLED = 1
    INACTIVE = 2


# Stored key names, in the order they are written to theme files.
ROLE_KEYS: tuple[tuple[str, ColorRole], ...] = (
    ("Window", ColorRole.WINDOW),
    ("WindowText", ColorRole.WINDOW_TEXT),
    ("Button", ColorRole.BUTTON),
    ("ButtonText", ColorRole.BUTTON_TEXT),
    ("Light", ColorRole.LIGHT),
    ("Midlight", ColorRole.MIDLIGHT),
    ("Dark", ColorRole.DARK),
    ("Mid", ColorRole.MID),
    ("Text", ColorRole.TEXT),
    ("BrightText", ColorRole.BRIGHT_TEXT),
    ("Base", ColorRole.BASE),
    ("AlternateBase", ColorRole.ALTERNATE_BASE),
    ("Shadow", ColorRole.SHADOW),
    ("Highlight", ColorRole.HIGHLIGHT),
    ("HighlightedText", ColorRole.HIGHLIGHTED_TEXT),
    ("Link", ColorRole.LINK),
    ("LinkVisited", ColorRole.LINK_VISITED),
    ("ToolTipBase", ColorRole.TOOL_TIP_BASE),
    ("ToolTipText", ColorRole.TOOL_TIP_TEXT),
    ("PlaceholderText", ColorRole.PLACEHOLDER_TEXT),
    ("NoRole", ColorRole.NO_ROLE),
)

_ROLE_BY_KEY = dict(ROLE_KEYS)

# Default light palette: role -> (normal colour, disabled colour).
_DEFAULTS: dict[ColorRole, tuple[str, str]] = {
    ColorRole.WINDOW_TEXT: ("#000000", "#bebebe"),
    ColorRole.BUTTON: ("#efefef", "#efefef"),
    ColorRole.LIGHT: ("#ffffff", "#ffffff"),
    ColorRole.MIDLIGHT: ("#cacaca", "#cacaca"),
    ColorRole.DARK: ("#9f9f9f", "#bebebe"),
    ColorRole.MID: ("#b8b8b8", "#b8b8b8"),
    ColorRole.TEXT: ("#000000", "#bebebe"),
    ColorRole.BRIGHT_TEXT: ("#ffffff", "#ffffff"),
    ColorRole.BUTTON_TEXT: ("#000000", "#bebebe"),
    ColorRole.BASE: ("#ffffff", "#efefef"),
    ColorRole.WINDOW: ("#efefef", "#efefef"),
    ColorRole.SHADOW: ("#767676", "#b1b1b1"),
    ColorRole.HIGHLIGHT: ("#308cc6", "#919191"),
    ColorRole.HIGHLIGHTED_TEXT: ("#ffffff", "#ffffff"),
    ColorRole.LINK: ("#0000ff", "#0000ff"),
    ColorRole.LINK_VISITED: ("#ff00ff", "#ff00ff"),
    ColorRole.ALTERNATE_BASE: ("#f7f7f7", "#f7f7f7"),
    ColorRole.NO_ROLE: ("#000000", "#000000"),
    ColorRole.TOOL_TIP_BASE: ("#ffffdc", "#ffffdc"),
    ColorRole.TOOL_TIP_TEXT: ("#000000", "#000000"),
    ColorRole.PLACEHOLDER_TEXT: ("#000000", "#000000"),
}


class Palette:
    """Colours per group and role, with a mask of the roles set explicitly."""

    def __init__(self) -> None:
        self._colors: dict[tuple[ColorGroup, ColorRole], Color] = {}
        for role, (normal, disabled) in _DEFAULTS.items():
            self._colors[(ColorGroup.ACTIVE, role)] = Color.from_name(normal)
            self._colors[(ColorGroup.INACTIVE, role)] = Color.from_name(normal)
            self._colors[(ColorGroup.DISABLED, role)] = Color.from_name(disabled)
        self.resolve_mask = 0

    def color(self, group: ColorGroup, role: ColorRole) -> Color:
        return self._colors[(ColorGroup(group), ColorRole(role))]

    def set_color(self, group: ColorGroup, role: ColorRole, color: Color) -> None:
        """Set a colour and mark its role as explicitly set."""
        role = ColorRole(role)
        self._colors[(ColorGroup(group), role)] = color
        self.resolve_mask |= 1 << int(role)

    def copy(self) -> "Palette":
        other = Palette()
        other._colors = dict(self._colors)
        other.resolve_mask = self.resolve_mask
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._colors == other._colors and self.resolve_mask == other.resolve_mask


def _norm_key(key: str) -> str:
    return "/".join(part for part in key.split("/") if part)


class PaletteSettings(MutableMapping):
    """Hierarchical settings keyed by slash-separated paths, kept in an INI file.

    Values are strings or lists of strings. Nothing is written until
    ``save`` is called, or the ``with`` block ends without an error.
    """

    def __init__(self, path: Union[str, os.PathLike, None] = None) -> None:
        self.path: Optional[Path] = Path(path) if path is not None else None
        self._data: dict[str, SettingsValue] = {}
        if self.path is not None and self.path.is_file():
            self._read(self.path)

    def __getitem__(self, key: str) -> SettingsValue:
        return self._data[_norm_key(key)]

    def __setitem__(self, key: str, value: SettingsValue) -> None:
        norm = _norm_key(key)
        if not norm:
            raise KeyError("empty settings key")
        self._data[norm] = list(value) if isinstance(value, (list, tuple)) else str(value)

    def __delitem__(self, key: str) -> None:
        del self._data[_norm_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __enter__(self) -> "PaletteSettings":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.save()

    def _remove_tree(self, key: str) -> None:
        norm = _norm_key(key)
        prefix = norm + "/"
        for k in [k for k in self._data if k == norm or k.startswith(prefix)]:
            del self._data[k]

    def _children(self, group: str) -> tuple[list[str], list[str]]:
        prefix = _norm_key(group) + "/"
        keys: set[str] = set()
        groups: set[str] = set()
        for k in self._data:
            if k.startswith(prefix):
                head, sep, _ = k[len(prefix):].partition("/")
                (groups if sep else keys).add(head)
        return sorted(keys), sorted(groups)

    def save(self) -> None:
        """Write the settings to their file."""
        if self.path is None:
            raise ValueError("settings have no file to save to")
        parser = configparser.RawConfigParser(delimiters=("=",))
        parser.optionxform = str  # type: ignore[assignment]
        for key in sorted(self._data):
            section, sep, rest = key.partition("/")
            if not sep:
                section, rest = "General", key
            if not parser.has_section(section):
                parser.add_section(section)
            parser.set(section, rest.replace("/", "\\"), _format_value(self._data[key]))
        with open(self.path, "w", encoding="utf-8") as handle:
            parser.write(handle)

    def _read(self, path: Path) -> None:
        parser = configparser.RawConfigParser(delimiters=("=",), strict=False)
        parser.optionxform = str  # type: ignore[assignment]
        parser.read(path, encoding="utf-8")
        for section in parser.sections():
            for option, raw in parser.items(section):
                sub = option.replace("\\", "/")
                key = sub if section == "General" else f"{section}/{sub}"
                self._data[_norm_key(key)] = _parse_value(raw)


def _quote(text: str) -> str:
    if any(c in text for c in ',"') or text != text.strip() or text.startswith("@"):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def _format_value(value: SettingsValue) -> str:
    if isinstance(value, list):
        if not value:
            return "@Invalid()"
        return ", ".join(_quote(v) for v in value)
    return _quote(value)


def _parse_value(raw: str) -> SettingsValue:
    raw = raw.strip()
    if raw == "@Invalid()":
        return []
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    in_quotes = False
    chars = iter(raw)
    for c in chars:
        if in_quotes:
            if c == "\\":
                current.append(next(chars, ""))
            elif c == '"':
                in_quotes = False
            else:
                current.append(c)
        elif c == '"':
            in_quotes = quoted = True
        elif c == ",":
            parts.append("".join(current) if quoted else "".join(current).strip())
            current, quoted = [], False
        else:
            current.append(c)
    parts.append("".join(current) if quoted else "".join(current).strip())
    return parts if len(parts) > 1 else parts[0]


def color_role(name: str) -> ColorRole:
    """The role stored under a key name; unknown names give NO_ROLE."""
    return _ROLE_BY_KEY.get(name, ColorRole.NO_ROLE)


def named_palette_list(settings: Optional[PaletteSettings]) -> list[str]:
    """Names of the themes registered in the settings."""
    if settings is None:
        return []
    keys, groups = settings._children(COLOR_THEMES_GROUP)
    return keys + groups


def named_palette_conf(settings: Optional[PaletteSettings], name: str) -> str:
    """File registered for a named theme, or an empty string."""
    if settings is None or not name:
        return ""
    value = settings.get(f"{COLOR_THEMES_GROUP}/{name}", "")
    return value if isinstance(value, str) else ""


def add_named_palette_conf(settings: Optional[PaletteSettings], name: str,
                           filename: str) -> None:
    """Register the file holding a named theme, replacing any stored theme."""
    if settings is None:
        return
    key = f"{COLOR_THEMES_GROUP}/{name}"
    settings._remove_tree(key)
    settings[key] = str(filename)


def delete_named_palette_conf(settings: Optional[PaletteSettings], name: str) -> None:
    """Forget a named theme and anything stored under it."""
    if settings is None:
        return
    settings._remove_tree(f"{COLOR_THEMES_GROUP}/{name}")


def load_named_palette(settings: Optional[PaletteSettings], name: str,
                       palette: Palette) -> bool:
    """Apply a theme stored in the settings to a palette; True if any colour was set."""
    if settings is None:
        return False
    _, groups = settings._children(COLOR_THEMES_GROUP)
    if name not in groups:
        return False
    group = f"{COLOR_THEMES_GROUP}/{name}"
    keys, _ = settings._children(group)
    result = 0
    for key in keys:
        clist = settings[f"{group}/{key}"]
        if not isinstance(clist, list) or len(clist) != 3:
            continue
        try:
            active, inactive, disabled = (Color.from_name(c) for c in clist)
        except ValueError:
            continue
        role = color_role(key)
        palette.set_color(ColorGroup.ACTIVE, role, active)
        palette.set_color(ColorGroup.INACTIVE, role, inactive)
        palette.set_color(ColorGroup.DISABLED, role, disabled)
        result += 1
    return result > 0


def save_named_palette(settings: Optional[PaletteSettings], name: str,
                       palette: Palette) -> bool:
    """Store every role of a palette as a named theme in the settings."""
    if settings is None:
        return False
    for key, role in ROLE_KEYS:
        settings[f"{COLOR_THEMES_GROUP}/{name}/{key}"] = [
            palette.color(ColorGroup.ACTIVE, role).name(),
            palette.color(ColorGroup.INACTIVE, role).name(),
            palette.color(ColorGroup.DISABLED, role).name(),
        ]
    return True


def load_named_palette_conf(name: str, filename: Union[str, os.PathLike],
                            palette: Palette) -> bool:
    """Apply a named theme read from a theme file."""
    return load_named_palette(PaletteSettings(filename), name, palette)


def save_named_palette_conf(name: str, filename: Union[str, os.PathLike],
                            palette: Palette) -> bool:
    """Write a palette as a named theme into a theme file."""
    with PaletteSettings(filename) as conf:
        return save_named_palette(conf, name, palette)


def _set_disabled_group(palette: Palette, window_text: Color, button: Color,
                        light: Color, dark: Color, mid: Color, text: Color,
                        bright_text: Color, base: Color, window: Color) -> None:
    group = ColorGroup.DISABLED
    for role, color in (
        (ColorRole.WINDOW_TEXT, window_text),
        (ColorRole.BUTTON, button),
        (ColorRole.LIGHT, light),
        (ColorRole.DARK, dark),
        (ColorRole.MID, mid),
        (ColorRole.TEXT, text),
        (ColorRole.BRIGHT_TEXT, bright_text),
        (ColorRole.BASE, base),
        (ColorRole.WINDOW, window),
        (ColorRole.MIDLIGHT, button.mixed(light)),
        (ColorRole.ALTERNATE_BASE, base.mixed(button)),
    ):
        palette.set_color(group, role, color)


def named_palette(settings: Optional[PaletteSettings], name: str,
                  palette: Palette, fixup: bool = False) -> bool:
    """Load a named theme from the settings or its registered file.

    Unless ``fixup`` is set, a dark palette gets its shading and disabled
    colours derived from the window colour. True if anything was applied.
    """
    result = 0
    if name and load_named_palette(settings, name, palette):
        result += 1
    else:
        filename = named_palette_conf(settings, name)
        if (filename and os.path.isfile(filename) and os.access(filename, os.R_OK)
                and load_named_palette_conf(name, filename, palette)):
            result += 1

    active = ColorGroup.ACTIVE
    if not fixup and palette.color(active, ColorRole.BASE).value() < 0x7F:
        color = palette.color(active, ColorRole.WINDOW)
        for group in ColorGroup:
            palette.set_color(group, ColorRole.LIGHT, color.lighter(140))
            palette.set_color(group, ColorRole.MIDLIGHT, color.lighter(100))
            palette.set_color(group, ColorRole.MID, color.lighter(90))
            palette.set_color(group, ColorRole.DARK, color.darker(160))
            palette.set_color(group, ColorRole.SHADOW, color.darker(180))
        c = palette.color
        _set_disabled_group(
            palette,
            window_text=c(active, ColorRole.WINDOW_TEXT).darker(),
            button=c(active, ColorRole.BUTTON),
            light=c(active, ColorRole.LIGHT),
            dark=c(active, ColorRole.DARK),
            mid=c(active, ColorRole.MID),
            text=c(active, ColorRole.TEXT).darker(),
            bright_text=c(active, ColorRole.TEXT).lighter(),
            base=c(active, ColorRole.BASE),
            window=c(active, ColorRole.WINDOW),
        )
        mid = c(active, ColorRole.MID)
        palette.set_color(ColorGroup.DISABLED, ColorRole.HIGHLIGHT, mid)
        palette.set_color(ColorGroup.DISABLED, ColorRole.BUTTON_TEXT, mid)
        result += 1

    return result > 0