"""
core/settings.py
================
Loader for the user settings file (``config.txt``).

Responsibilities
----------------
- Parse the line-oriented ``key: value`` format into literal strings.
- Coerce each value into its typed form and build a ``Settings`` instance.
- Validate cross-field constraints (maze size vs. food count, ranges).
- Never import pygame; the display layer reads ``Settings`` afterwards.

File format
-----------
    # comment to end of line
    key: value

Blank lines and comments are skipped.  The key is everything before the
first colon, the value everything after it; both are trimmed.  There is no
quoting, escaping or nesting.

Recognised keys
---------------
card              ``discrete`` or a card index
resources         resource directory, relative to the settings file
window            ``WxH``, ``max`` or ``fullscreen``
resolution        ``WxH`` or ``max``
target-fps        integer or ``unlimited``
display-controls  boolean
display-clock     ``none``, ``stopwatch`` or countdown seconds
fov               degrees
ui-scale          float
dimensions        ``XxYxZxW``
ghost-move-time   seconds per ghost step
food-count        integer
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Optional, Union

log = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised for a settings file that cannot be read, parsed or validated."""

    def __init__(
        self,
        message: str,
        path:    Optional[Union[str, Path]] = None,
        line:    Optional[int] = None,
    ) -> None:
        self.path = str(path) if path is not None else None
        self.line = line
        where = ""
        if self.path and line is not None:
            where = f"{self.path}:{line}: "
        elif self.path:
            where = f"{self.path}: "
        elif line is not None:
            where = f"line {line}: "
        super().__init__(f"{where}{message}")


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

class CardKind(enum.Enum):
    DISCRETE = "discrete"
    INDEX    = "index"


@dataclass(frozen=True)
class CardPreference:
    """Which graphics card the game should ask for."""
    kind:  CardKind      = CardKind.DISCRETE
    index: Optional[int] = None

    def __str__(self) -> str:
        return "discrete" if self.kind is CardKind.DISCRETE else str(self.index)


class WindowMode(enum.Enum):
    WINDOWED   = "windowed"
    MAX        = "max"          # borderless, covering the desktop
    FULLSCREEN = "fullscreen"


@dataclass(frozen=True)
class WindowSpec:
    mode: WindowMode                = WindowMode.WINDOWED
    size: Optional[tuple[int, int]] = (1280, 720)


class ClockMode(enum.Enum):
    NONE      = "none"
    STOPWATCH = "stopwatch"
    COUNTDOWN = "countdown"


@dataclass(frozen=True)
class ClockSpec:
    mode:    ClockMode = ClockMode.STOPWATCH
    seconds: float     = 0.0


# ---------------------------------------------------------------------------
# Value grammars
# ---------------------------------------------------------------------------

_TRUE  = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def parse_bool(value: str) -> bool:
    token = value.lower()
    if token in _TRUE:
        return True
    if token in _FALSE:
        return False
    raise ValueError(f"expected true or false, got {value!r}")


def parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"expected an integer, got {value!r}") from None


def parse_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"expected a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def parse_dimensions(value: str, count: Optional[int] = None) -> tuple[int, ...]:
    """Split a dimension string such as ``5x5x3x3`` or ``1280x720``.

    Parameters
    ----------
    value:
        The raw value.  Separators are ``x`` or ``X``; whitespace around
        each part is allowed.
    count:
        Required number of parts, or ``None`` for any number >= 2.

    Raises
    ------
    ValueError
        If a part is not an integer or the part count is wrong.
    """
    parts = value.lower().split("x")
    if count is not None and len(parts) != count:
        example = "x".join(["N"] * count)
        raise ValueError(f"expected {count} sizes of the form {example}, got {value!r}")
    if count is None and len(parts) < 2:
        raise ValueError(f"expected sizes separated by 'x', got {value!r}")
    try:
        return tuple(int(part.strip()) for part in parts)
    except ValueError:
        raise ValueError(f"expected integer sizes, got {value!r}") from None


def parse_card(value: str) -> CardPreference:
    if value.lower() == "discrete":
        return CardPreference()
    index = parse_int(value)
    if index < 0:
        raise ValueError(f"card index must not be negative, got {value!r}")
    return CardPreference(kind=CardKind.INDEX, index=index)


def parse_window(value: str) -> WindowSpec:
    token = value.lower()
    if token == "max":
        return WindowSpec(mode=WindowMode.MAX, size=None)
    if token == "fullscreen":
        return WindowSpec(mode=WindowMode.FULLSCREEN, size=None)
    return WindowSpec(mode=WindowMode.WINDOWED, size=parse_dimensions(value, 2))


def parse_resolution(value: str) -> Optional[tuple[int, int]]:
    if value.lower() == "max":
        return None
    return parse_dimensions(value, 2)


def parse_target_fps(value: str) -> Optional[int]:
    if value.lower() == "unlimited":
        return None
    return parse_int(value)


def parse_clock(value: str) -> ClockSpec:
    token = value.lower()
    if token == "none":
        return ClockSpec(mode=ClockMode.NONE)
    if token == "stopwatch":
        return ClockSpec(mode=ClockMode.STOPWATCH)
    try:
        seconds = parse_float(value)
    except ValueError:
        raise ValueError(
            f"expected none, stopwatch or a number of seconds, got {value!r}"
        ) from None
    return ClockSpec(mode=ClockMode.COUNTDOWN, seconds=seconds)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass
class Settings:
    """Typed view of ``config.txt``.

    Every field defaults to the value shipped in the repository's
    ``config.txt``, so keys missing from a user's file fall back to those.
    """

    card:             CardPreference            = field(default_factory=CardPreference)
    resource_path:    Path                      = Path("res")
    window:           WindowSpec                = field(default_factory=WindowSpec)
    resolution:       Optional[tuple[int, int]] = None
    target_fps:       Optional[int]             = 60
    display_controls: bool                      = True
    display_clock:    ClockSpec                 = field(default_factory=ClockSpec)
    fov:              float                     = 90.0
    ui_scale:         float                     = 1.0
    dimensions:       tuple[int, int, int, int] = (5, 5, 3, 3)
    ghost_move_time:  float                     = 1.65
    food_count:       int                       = 10

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(
        cls,
        raw:      dict[str, str],
        base_dir: Optional[Union[str, Path]] = None,
        lines:    Optional[dict[str, int]] = None,
        path:     Optional[Union[str, Path]] = None,
    ) -> "Settings":
        """Coerce a ``key -> literal value`` mapping into ``Settings``.

        Parameters
        ----------
        raw:
            Mapping as returned by ``parse_settings_text``.
        base_dir:
            Directory that ``resources`` is resolved against.  Left relative
            when ``None``.
        lines:
            Optional ``key -> line number`` map used in error messages.
        path:
            Optional file path used in error messages.

        Raises
        ------
        SettingsError
            For an unknown key or a value outside its grammar.
        """
        lines    = lines or {}
        settings = cls()
        for key, value in raw.items():
            parser = _PARSERS.get(key)
            if parser is None:
                raise SettingsError(f"unknown setting {key!r}", path, lines.get(key))
            attr, convert = parser
            try:
                setattr(settings, attr, convert(value))
            except ValueError as exc:
                raise SettingsError(f"{key}: {exc}", path, lines.get(key)) from None

        if base_dir is not None and not settings.resource_path.is_absolute():
            settings.resource_path = Path(base_dir) / settings.resource_path
        return settings

    def with_dimensions(self, dimensions: tuple[int, ...]) -> "Settings":
        """Return a validated copy with *dimensions* replaced."""
        if len(dimensions) != 4:
            raise SettingsError(
                f"dimensions: expected 4 sizes, got {len(dimensions)}"
            )
        copy = replace(self, dimensions=tuple(int(d) for d in dimensions))
        copy.validate()
        return copy

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return math.prod(self.dimensions)

    def validate(self, path: Optional[Union[str, Path]] = None) -> None:
        """Check constraints that span more than one value.

        Raises
        ------
        SettingsError
            Naming the first setting that is out of range.
        """
        if any(d < 1 for d in self.dimensions):
            raise SettingsError(
                f"dimensions: every size must be at least 1, got {_dims(self.dimensions)}",
                path,
            )
        if self.cell_count < 2:
            raise SettingsError(
                f"dimensions: the maze needs at least 2 cells, got {_dims(self.dimensions)}",
                path,
            )
        if self.food_count < 0:
            raise SettingsError(f"food-count: must not be negative, got {self.food_count}", path)
        # One cell is reserved for the player start
        if self.food_count > self.cell_count - 1:
            raise SettingsError(
                f"food-count: {self.food_count} does not fit in a "
                f"{_dims(self.dimensions)} maze (at most {self.cell_count - 1})",
                path,
            )
        if self.ghost_move_time <= 0:
            raise SettingsError(
                f"ghost-move-time: must be positive, got {self.ghost_move_time}", path
            )
        if not 0 < self.fov < 180:
            raise SettingsError(f"fov: must be between 0 and 180 degrees, got {self.fov}", path)
        if self.ui_scale <= 0:
            raise SettingsError(f"ui-scale: must be positive, got {self.ui_scale}", path)
        if self.target_fps is not None and self.target_fps < 1:
            raise SettingsError(
                f"target-fps: must be at least 1 or 'unlimited', got {self.target_fps}", path
            )
        if self.display_clock.mode is ClockMode.COUNTDOWN and self.display_clock.seconds <= 0:
            raise SettingsError(
                f"display-clock: countdown must be positive, got {self.display_clock.seconds}",
                path,
            )
        if self.window.size is not None and min(self.window.size) < 1:
            raise SettingsError(f"window: sizes must be positive, got {_dims(self.window.size)}", path)
        if self.resolution is not None and min(self.resolution) < 1:
            raise SettingsError(
                f"resolution: sizes must be positive, got {_dims(self.resolution)}", path
            )


def _dims(sizes: tuple[int, ...]) -> str:
    return "x".join(str(s) for s in sizes)


def _parse_dimensions4(value: str) -> tuple[int, int, int, int]:
    return parse_dimensions(value, 4)


# key -> (attribute, converter)
_PARSERS: dict[str, tuple[str, Callable[[str], object]]] = {
    "card":             ("card",             parse_card),
    "resources":        ("resource_path",    Path),
    "window":           ("window",           parse_window),
    "resolution":       ("resolution",       parse_resolution),
    "target-fps":       ("target_fps",       parse_target_fps),
    "display-controls": ("display_controls", parse_bool),
    "display-clock":    ("display_clock",    parse_clock),
    "fov":              ("fov",              parse_float),
    "ui-scale":         ("ui_scale",         parse_float),
    "dimensions":       ("dimensions",       _parse_dimensions4),
    "ghost-move-time":  ("ghost_move_time",  parse_float),
    "food-count":       ("food_count",       parse_int),
}

#: Every key the settings file understands, in file order.
KNOWN_KEYS: tuple[str, ...] = tuple(_PARSERS)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _parse_with_lines(
    text: str,
    path: Optional[Union[str, Path]] = None,
) -> tuple[dict[str, str], dict[str, int]]:
    values:  dict[str, str] = {}
    lines:   dict[str, int] = {}
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            raise SettingsError(f"expected 'key: value', got {line!r}", path, number)
        if key in values:
            log.warning(
                "Setting %r repeated on line %d (first on line %d); using the last value",
                key, number, lines[key],
            )
        values[key] = value.strip()
        lines[key]  = number
    return values, lines


def parse_settings_text(text: str) -> dict[str, str]:
    """Parse settings text into a ``key -> literal value`` mapping.

    Values are returned exactly as written (trimmed), without coercion.

    Raises
    ------
    SettingsError
        If a non-comment line has no colon.
    """
    values, _ = _parse_with_lines(text)
    return values


def read_settings_file(path: Union[str, Path]) -> dict[str, str]:
    """Read *path* and return its ``key -> literal value`` mapping."""
    values, _ = _parse_with_lines(_read_text(path), path)
    return values


def load_settings(path: Union[str, Path]) -> Settings:
    """Read, coerce and validate the settings file at *path*.

    ``resources`` is resolved relative to the directory holding *path*.

    Raises
    ------
    SettingsError
        For a missing or unreadable file, a malformed line, an unknown key,
        a bad value, or a failed validation check.
    """
    path = Path(path)
    values, lines = _parse_with_lines(_read_text(path), path)
    settings = Settings.from_mapping(values, base_dir=path.parent, lines=lines, path=path)
    settings.validate(path)
    log.info(
        "Loaded settings from %s: maze %s, %d food, ghost step %.2fs",
        path, _dims(settings.dimensions), settings.food_count, settings.ghost_move_time,
    )
    return settings


def _read_text(path: Union[str, Path]) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SettingsError("settings file not found", path) from None
    except UnicodeDecodeError as exc:
        raise SettingsError(
            f"settings file is not valid UTF-8: {exc.reason} at byte {exc.start}", path
        ) from None
    except OSError as exc:
        raise SettingsError(f"cannot read settings file: {exc.strerror}", path) from None
