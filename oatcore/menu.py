"""A one-line scrolling menu on a character LCD, with a few special glyphs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .settings import MountSettings

DEFAULT_BRIGHTNESS = 10


class SpecialChar(Enum):
    """Custom glyphs, valued by their character-generator slot."""

    DEGREES = 0
    MINUTES = 1
    LEFT_ARROW = 2
    RIGHT_ARROW = 3
    UP_ARROW = 4
    DOWN_ARROW = 5
    TRACKING = 6
    NO_TRACKING = 7

    @property
    def bitmap(self) -> tuple[int, ...]:
        """The 5x8 pixel pattern, one row per entry."""
        return _BITMAPS[self]

    @property
    def symbol(self) -> str:
        """A text character that stands for the glyph."""
        return _SYMBOLS[self]

    @classmethod
    def for_char(cls, ch: str) -> Optional["SpecialChar"]:
        """The glyph that *ch* is replaced by, or None."""
        return _CHAR_MAP.get(ch)


_BITMAPS = {
    SpecialChar.RIGHT_ARROW: (0b00000, 0b01000, 0b01100, 0b01110, 0b01100, 0b01000, 0b00000, 0b00000),
    SpecialChar.LEFT_ARROW: (0b00000, 0b00010, 0b00110, 0b01110, 0b00110, 0b00010, 0b00000, 0b00000),
    SpecialChar.UP_ARROW: (0b00100, 0b01110, 0b11111, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100),
    SpecialChar.DOWN_ARROW: (0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b11111, 0b01110, 0b00100),
    SpecialChar.DEGREES: (0b01100, 0b10010, 0b10010, 0b01100, 0b00000, 0b00000, 0b00000, 0b00000),
    SpecialChar.MINUTES: (0b01000, 0b01000, 0b01000, 0b00000, 0b00000, 0b00000, 0b00000, 0b00000),
    SpecialChar.TRACKING: (0b10111, 0b00010, 0b10010, 0b00010, 0b10111, 0b00101, 0b10110, 0b00101),
    SpecialChar.NO_TRACKING: (0b10000, 0b00000, 0b10000, 0b00010, 0b10000, 0b00000, 0b10000, 0b00000),
}

_SYMBOLS = {
    SpecialChar.DEGREES: "\u00b0",
    SpecialChar.MINUTES: "'",
    SpecialChar.LEFT_ARROW: "\u2190",
    SpecialChar.RIGHT_ARROW: "\u2192",
    SpecialChar.UP_ARROW: "\u2191",
    SpecialChar.DOWN_ARROW: "\u2193",
    SpecialChar.TRACKING: "\u2022",
    SpecialChar.NO_TRACKING: "\u00b7",
}

_CHAR_MAP = {
    ">": SpecialChar.RIGHT_ARROW,
    "<": SpecialChar.LEFT_ARROW,
    "^": SpecialChar.UP_ARROW,
    "~": SpecialChar.DOWN_ARROW,
    "@": SpecialChar.DEGREES,
    "'": SpecialChar.MINUTES,
    "&": SpecialChar.TRACKING,
    "`": SpecialChar.NO_TRACKING,
}


@dataclass(frozen=True)
class MenuItem:
    """One top-level menu entry; the id carries no ordering."""

    display: str
    id: int


class Display(ABC):
    """A character display the menu draws on."""

    @abstractmethod
    def set_cursor(self, col: int, row: int) -> None:
        """Move the cursor."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text at the cursor, advancing it."""

    @abstractmethod
    def write_special(self, char: SpecialChar) -> None:
        """Write one custom glyph at the cursor, advancing it."""

    @abstractmethod
    def clear(self) -> None:
        """Blank the display and home the cursor."""


class TextDisplay(Display):
    """An in-memory character grid; text past the right edge is dropped."""

    def __init__(self, cols: int = 16, rows: int = 2):
        if cols <= 0 or rows <= 0:
            raise ValueError("display needs at least one column and one row")
        self._cols = cols
        self._rows = rows
        self._grid = [[" "] * cols for _ in range(rows)]
        self._col = 0
        self._row = 0

    def set_cursor(self, col: int, row: int) -> None:
        if not (0 <= col and 0 <= row < self._rows):
            raise ValueError(f"cursor position out of range: ({col}, {row})")
        self._col = col
        self._row = row

    def write(self, text: str) -> None:
        line = self._grid[self._row]
        for ch in text:
            if self._col < self._cols:
                line[self._col] = ch
            self._col += 1

    def write_special(self, char: SpecialChar) -> None:
        self.write(char.symbol)

    def clear(self) -> None:
        self._grid = [[" "] * self._cols for _ in range(self._rows)]
        self._col = 0
        self._row = 0

    def lines(self) -> list[str]:
        """The displayed rows as strings."""
        return ["".join(row) for row in self._grid]


class LcdMenu:
    """Drives a display with a horizontally scrolling menu.

    The active item is framed by selector arrows which stay at the same
    column while the menu scrolls. Brightness is read from and persisted to
    *settings* when given.
    """

    def __init__(
        self,
        display: Display,
        cols: int = 16,
        rows: int = 2,
        max_items: int = 10,
        settings: Optional["MountSettings"] = None,
    ):
        self._display = display
        self._cols = cols
        self._rows = rows
        self._max_items = max_items
        self._settings = settings
        self._char_height_rows = 1
        self.bad_hardware = False
        self._brightness = DEFAULT_BRIGHTNESS
        self._reset()

    def _reset(self) -> None:
        self._items: list[MenuItem] = []
        self._active_index = 0
        self._longest = 0
        self._columns = self._cols
        self._active_row = 0
        self._active_col = 0
        self._last_display = [""] * max(self._rows, 2)

    def startup(self) -> None:
        """Reset the menu and apply the stored brightness."""
        self._reset()
        level = self._settings.brightness if self._settings is not None else DEFAULT_BRIGHTNESS
        self.set_brightness(level, False)

    def find_by_id(self, item_id: int) -> Optional[MenuItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def add_item(self, display: str, item_id: int) -> MenuItem:
        """Append an item; order of addition is display order."""
        if len(self._items) >= self._max_items:
            raise ValueError(f"menu holds at most {self._max_items} items")
        item = MenuItem(display, item_id)
        self._items.append(item)
        self._longest = max(self._longest, len(display))
        return item

    def active(self) -> int:
        """The id of the active item."""
        if not self._items:
            raise LookupError("menu has no items")
        return self._items[self._active_index].id

    def set_active(self, item_id: int) -> None:
        """Make the item with *item_id* active; unknown ids are ignored."""
        for index, item in enumerate(self._items):
            if item.id == item_id:
                self._active_index = index
                break

    def set_cursor(self, col: int, row: int) -> None:
        self._active_row = row
        self._active_col = col

    def clear(self) -> None:
        self._display.clear()

    def set_brightness(self, level: int, persist: bool = True) -> None:
        self._brightness = level
        if persist and self._settings is not None:
            self._settings.brightness = level

    def brightness(self) -> int:
        return self._brightness

    def brightness_range(self) -> tuple[int, int]:
        """(minimum, maximum) brightness; faulty backlights are only on or off."""
        return (0, 1) if self.bad_hardware else (0, 255)

    def set_next_active(self) -> None:
        """Advance to the next item, wrapping, and redraw."""
        if not self._items:
            return
        self._active_index = (self._active_index + 1) % len(self._items)
        self.update_display()
        self._display.set_cursor(0, self._char_height_rows)
        self._display.write(" " * self._columns)

    def menu_line(self) -> str:
        """The top line with the active item's arrows kept at a fixed column."""
        parts = []
        offset_to_active = 0
        offset = 0
        for index, item in enumerate(self._items):
            is_active = index == self._active_index
            part = f"{'>' if is_active else ' '}{item.display}{'<' if is_active else ' '}"
            if is_active:
                offset_to_active = offset
            parts.append(part)
            offset += len(part)
        menu = "".join(parts)

        usable = self._columns - 1  # keep a gap before the tracking indicator
        margin = int((usable - self._longest) / 2)
        start = offset_to_active - margin

        line = ""
        if start < 0:
            line = " " * min(-start, usable)
            start = 0
        line += menu[start:start + max(0, usable - len(line))]
        return line.ljust(self._columns)

    def update_display(self) -> None:
        """Redraw the top menu line and leave the cursor on the second row."""
        self._display.set_cursor(0, 0)
        self._active_row = 0
        self._active_col = 0
        self.print_menu(self.menu_line())
        self.set_cursor(0, 1)

    def print_menu(self, line: str) -> None:
        """Print *line* at the cursor, padding with spaces; unchanged lines are skipped."""
        row = self._active_row
        if self._last_display[row] == line and self._active_col == 0:
            return
        self._last_display[row] = line
        self._display.set_cursor(self._active_col, self._char_height_rows * row)
        for ch in line:
            self._print_char(ch)
        spaces = self._columns - len(line)
        if spaces > 0:
            self._display.write(" " * spaces)

    def print_at(self, col: int, row: int, char: str) -> None:
        self._display.set_cursor(col, self._char_height_rows * row)
        self._print_char(char)

    def _print_char(self, ch: str) -> None:
        special = SpecialChar.for_char(ch)
        if special is not None:
            self._display.write_special(special)
        else:
            self._display.write(ch)