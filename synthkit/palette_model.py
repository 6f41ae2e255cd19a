"""Editable table of palette colours: one row per role, one column per group."""

from __future__ import annotations

from typing import Callable, Optional

from .palette import ROLE_KEYS, Color, ColorGroup, ColorRole, Palette

Cell = tuple[int, int]
PaletteHandler = Callable[[Palette], None]
DataHandler = Callable[[Cell, Cell], None]

_COLUMN_GROUPS = {1: ColorGroup.ACTIVE, 2: ColorGroup.INACTIVE, 3: ColorGroup.DISABLED}
_HEADERS = {0: "Color Role", 1: "Active", 2: "Inactive", 3: "Disabled"}


class PaletteModel:
    """Rows are colour roles (by role number); column 0 is the role name and
    whether it was set explicitly, columns 1-3 the active, inactive and
    disabled colours.

    With ``generate`` on, editing one colour derives the related ones.
    ``on_palette_changed(palette)`` and ``on_data_changed(first, last)``
    report edits; cells are ``(row, column)`` pairs.
    """

    column_count = 4

    def __init__(self, palette: Optional[Palette] = None,
                 parent_palette: Optional[Palette] = None) -> None:
        self._role_names = {role: key for key, role in ROLE_KEYS}
        self.row_count = len(ROLE_KEYS)
        self.generate = True
        self.on_palette_changed: Optional[PaletteHandler] = None
        self.on_data_changed: Optional[DataHandler] = None
        self.palette = Palette()
        self.parent_palette = Palette()
        self.set_palette(palette if palette is not None else Palette(),
                         parent_palette if parent_palette is not None else Palette())

    # -- helpers ----------------------------------------------------------

    def _check_row(self, row: int) -> ColorRole:
        if not 0 <= row < self.row_count:
            raise IndexError(f"palette row out of range: {row}")
        return ColorRole(row)

    @staticmethod
    def _group(column: int) -> ColorGroup:
        try:
            return _COLUMN_GROUPS[column]
        except KeyError:
            raise ValueError(f"not a colour column: {column}") from None

    def _emit(self, first: Cell, last: Cell) -> None:
        if self.on_palette_changed is not None:
            self.on_palette_changed(self.palette)
        if self.on_data_changed is not None:
            self.on_data_changed(first, last)

    # -- model ------------------------------------------------------------

    def set_palette(self, palette: Palette, parent_palette: Palette) -> None:
        """Replace the edited palette and the one unset roles fall back to."""
        self.palette = palette.copy()
        self.parent_palette = parent_palette.copy()
        if self.on_data_changed is not None:
            self.on_data_changed((0, 0), (self.row_count - 1, 3))

    def role_name(self, row: int) -> str:
        """Stored key name of a row's role."""
        return self._role_names[self._check_row(row)]

    def is_edited(self, row: int) -> bool:
        """Whether the row's role is set explicitly in the palette."""
        role = self._check_row(row)
        return bool(self.palette.resolve_mask & (1 << int(role)))

    def color(self, row: int, column: int) -> Color:
        """Colour shown in a cell of columns 1-3."""
        role = self._check_row(row)
        return self.palette.color(self._group(column), role)

    def set_color(self, row: int, column: int, color: Color) -> None:
        """Set a cell's colour, deriving related colours when generating."""
        role = self._check_row(row)
        group = self._group(column)
        pal = self.palette
        pal.set_color(group, role, color)
        first: Cell = (int(role), 0)
        last: Cell = (int(role), 3)
        if self.generate:
            pal.set_color(ColorGroup.INACTIVE, role, color)
            disabled = ColorGroup.DISABLED
            if role in (ColorRole.WINDOW_TEXT, ColorRole.TEXT,
                        ColorRole.BUTTON_TEXT, ColorRole.BASE):
                pass
            elif role is ColorRole.DARK:
                for target in (ColorRole.WINDOW_TEXT, ColorRole.DARK,
                               ColorRole.TEXT, ColorRole.BUTTON_TEXT):
                    pal.set_color(disabled, target, color)
                first = (0, 0)
                last = (self.row_count - 1, 3)
            elif role is ColorRole.WINDOW:
                pal.set_color(disabled, ColorRole.BASE, color)
                pal.set_color(disabled, ColorRole.WINDOW, color)
                first = (int(ColorRole.BASE), 0)
            elif role is ColorRole.HIGHLIGHT:
                pal.set_color(disabled, ColorRole.HIGHLIGHT, color.darker(120))
            else:
                pal.set_color(disabled, role, color)
        self._emit(first, last)

    def set_edited(self, row: int, edited: bool) -> None:
        """Mark a role as set, or drop it back to the parent palette's colours."""
        role = self._check_row(row)
        bit = 1 << int(role)
        if edited:
            mask = self.palette.resolve_mask | bit
        else:
            mask = self.palette.resolve_mask & ~bit
            for group in ColorGroup:
                self.palette.set_color(group, role,
                                       self.parent_palette.color(group, role))
        self.palette.resolve_mask = mask
        self._emit((int(role), 0), (int(role), 3))

    def header(self, section: int) -> Optional[str]:
        """Column title, or None past the last column."""
        return _HEADERS.get(section)

    def reset_all(self) -> None:
        """Drop every role back to the parent palette."""
        for _, role in ROLE_KEYS:
            self.set_edited(int(role), False)