"""Page content for the panel: effects, inline formatting and the Page command."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from panelctl.protocol import (
    DEFAULT_LINE,
    MESSAGE_STRING_SIZE,
    Command,
    _check_byte,
    _check_char,
    _check_text,
    _require,
)


class _Effect(Enum):
    """An effect named by its JSON value and sent as a one-letter code."""

    @property
    def code(self) -> str:
        return _CODES[self]

    def __str__(self) -> str:
        return self.code


class Leading(_Effect):
    """How a page appears."""

    BLOCK_MOVE = "block_move"
    CURTAIN_DOWN = "curtain_down"
    CURTAIN_UP = "curtain_up"
    HOLD = "hold"
    IMMEDIATE = "immediate"
    PEN_AMPLUS = "pen_amplus"
    PEN_HELLO_WORLD = "pen_hello_world"
    PEN_WELCOME = "pen_welcome"
    RANDOM = "random"
    SCROLL_DOWN = "scroll_down"
    SCROLL_LEFT = "scroll_left"
    SCROLL_RIGHT = "scroll_right"
    SCROLL_UP = "scroll_up"
    SNOW = "snow"
    TWINKLE = "twinkle"
    VCLOSE = "vclose"
    VOPEN = "vopen"
    XOPEN = "xopen"


class Lagging(_Effect):
    """How a page disappears."""

    CURTAIN_DOWN = "curtain_down"
    CURTAIN_UP = "curtain_up"
    HOLD = "hold"
    IMMEDIATE = "immediate"
    SCROLL_DOWN = "scroll_down"
    SCROLL_LEFT = "scroll_left"
    SCROLL_RIGHT = "scroll_right"
    SCROLL_UP = "scroll_up"
    VCLOSE = "vclose"
    VOPEN = "vopen"
    XOPEN = "xopen"


class WaitingModeAndSpeed(_Effect):
    """Speed and behaviour while a page is shown."""

    FASTEST_BLINKING = "fastest_blinking"
    FASTEST_NORMAL = "fastest_normal"
    FASTEST_SONG1 = "fastest_song1"
    FASTEST_SONG2 = "fastest_song2"
    FASTEST_SONG3 = "fastest_song3"
    MIDDLE_FAST_BLINKING = "middle_fast_blinking"
    MIDDLE_FAST_NORMAL = "middle_fast_normal"
    MIDDLE_FAST_SONG1 = "middle_fast_song1"
    MIDDLE_FAST_SONG2 = "middle_fast_song2"
    MIDDLE_FAST_SONG3 = "middle_fast_song3"
    MIDDLE_SLOW_BLINKING = "middle_slow_blinking"
    MIDDLE_SLOW_NORMAL = "middle_slow_normal"
    MIDDLE_SLOW_SONG1 = "middle_slow_song1"
    MIDDLE_SLOW_SONG2 = "middle_slow_song2"
    MIDDLE_SLOW_SONG3 = "middle_slow_song3"
    SLOWEST_BLINKING = "slowest_blinking"
    SLOWEST_NORMAL = "slowest_normal"
    SLOWEST_SONG1 = "slowest_song1"
    SLOWEST_SONG2 = "slowest_song2"
    SLOWEST_SONG3 = "slowest_song3"


_CODES: dict[_Effect, str] = {
    Leading.IMMEDIATE: "A",
    Leading.XOPEN: "B",
    Leading.CURTAIN_UP: "C",
    Leading.CURTAIN_DOWN: "D",
    Leading.SCROLL_LEFT: "E",
    Leading.SCROLL_RIGHT: "F",
    Leading.VOPEN: "G",
    Leading.VCLOSE: "H",
    Leading.SCROLL_UP: "I",
    Leading.SCROLL_DOWN: "J",
    Leading.HOLD: "K",
    Leading.SNOW: "L",
    Leading.TWINKLE: "M",
    Leading.BLOCK_MOVE: "N",
    Leading.RANDOM: "P",
    Leading.PEN_HELLO_WORLD: "Q",
    Leading.PEN_WELCOME: "R",
    Leading.PEN_AMPLUS: "S",
    Lagging.IMMEDIATE: "A",
    Lagging.XOPEN: "B",
    Lagging.CURTAIN_UP: "C",
    Lagging.CURTAIN_DOWN: "D",
    Lagging.SCROLL_LEFT: "E",
    Lagging.SCROLL_RIGHT: "F",
    Lagging.VOPEN: "G",
    Lagging.VCLOSE: "H",
    Lagging.SCROLL_UP: "I",
    Lagging.SCROLL_DOWN: "J",
    Lagging.HOLD: "K",
    WaitingModeAndSpeed.FASTEST_NORMAL: "A",
    WaitingModeAndSpeed.FASTEST_BLINKING: "B",
    WaitingModeAndSpeed.FASTEST_SONG1: "C",
    WaitingModeAndSpeed.FASTEST_SONG2: "D",
    WaitingModeAndSpeed.FASTEST_SONG3: "E",
    WaitingModeAndSpeed.MIDDLE_FAST_NORMAL: "Q",
    WaitingModeAndSpeed.MIDDLE_FAST_BLINKING: "R",
    WaitingModeAndSpeed.MIDDLE_FAST_SONG1: "S",
    WaitingModeAndSpeed.MIDDLE_FAST_SONG2: "T",
    WaitingModeAndSpeed.MIDDLE_FAST_SONG3: "U",
    WaitingModeAndSpeed.MIDDLE_SLOW_NORMAL: "a",
    WaitingModeAndSpeed.MIDDLE_SLOW_BLINKING: "b",
    WaitingModeAndSpeed.MIDDLE_SLOW_SONG1: "c",
    WaitingModeAndSpeed.MIDDLE_SLOW_SONG2: "d",
    WaitingModeAndSpeed.MIDDLE_SLOW_SONG3: "e",
    WaitingModeAndSpeed.SLOWEST_NORMAL: "q",
    WaitingModeAndSpeed.SLOWEST_BLINKING: "r",
    WaitingModeAndSpeed.SLOWEST_SONG1: "s",
    WaitingModeAndSpeed.SLOWEST_SONG2: "t",
    WaitingModeAndSpeed.SLOWEST_SONG3: "u",
}


class Font(Enum):
    """Inline font selection."""

    NORMAL = "<AA>"
    BOLD = "<AB>"
    NARROW = "<AC>"
    LARGE = "<AD>"
    LONG = "<AE>"

    def __str__(self) -> str:
        return self.value


class Clock(Enum):
    """Inline date or time display."""

    DATE = "<KD>"
    TIME = "<KT>"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ColumnStart:
    """Inline start column for the following text."""

    column: int

    def __post_init__(self) -> None:
        _check_byte(self.column, "column")

    def __str__(self) -> str:
        return f"<N{self.column:02X}>"


_EUROPEAN_CODES = {
    "ü": "<U7C>",
    "Ü": "<U5C>",
    "ä": "<U64>",
    "Ä": "<U44>",
    "ö": "<U76>",
    "Ö": "<U56>",
    "ß": "<U5F>",
}


def replace_european_characters(message: str) -> str:
    """Replace umlauts and ß with panel codes, dropping pieces that overflow the message size."""
    parts: list[str] = []
    used = 0
    for character in message:
        piece = _EUROPEAN_CODES.get(character, character)
        size = len(piece.encode("utf-8"))
        if used + size <= MESSAGE_STRING_SIZE:
            parts.append(piece)
            used += size
    return "".join(parts)


@dataclass(frozen=True)
class Page(Command):
    """A page of text together with its display effects."""

    id: str
    message: str
    leading: Leading = Leading.IMMEDIATE
    lagging: Lagging = Lagging.HOLD
    waiting_mode_and_speed: WaitingModeAndSpeed = WaitingModeAndSpeed.FASTEST_NORMAL
    line: int = DEFAULT_LINE

    def __post_init__(self) -> None:
        _check_char(self.id, "page id")
        _check_text(self.message, "message", MESSAGE_STRING_SIZE)
        _check_byte(self.line, "line")
        for name, kind in (
            ("leading", Leading),
            ("lagging", Lagging),
            ("waiting_mode_and_speed", WaitingModeAndSpeed),
        ):
            if not isinstance(getattr(self, name), kind):
                raise TypeError(f"{name} must be a {kind.__name__}")

    def __str__(self) -> str:
        message = replace_european_characters(self.message)
        return (
            f"<L{self.line}><P{self.id}><F{self.leading}>"
            f"<M{self.waiting_mode_and_speed}><WA><F{self.lagging}>{message}"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Page:
        return cls(
            id=_require(data, "id"),
            message=_require(data, "message"),
            leading=Leading(_require(data, "leading")),
            lagging=Lagging(_require(data, "lagging")),
            waiting_mode_and_speed=WaitingModeAndSpeed(
                _require(data, "waiting_mode_and_speed")
            ),
            line=_require(data, "line"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "id": self.id,
            "leading": self.leading.value,
            "lagging": self.lagging.value,
            "waiting_mode_and_speed": self.waiting_mode_and_speed.value,
            "message": self.message,
        }