"""Command framing for the AM03127 LED panel and the simple commands."""

from __future__ import annotations

import functools
import operator
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

MESSAGE_STRING_SIZE = 16
COMMAND_STRING_SIZE = 64
CHECKSUM_STRING_SIZE = 2
DEFAULT_PAGE = "A"
DEFAULT_LINE = 1
DEFAULT_SCHEDULE = "A"
MAX_SCHEDULE_PAGES = 31


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


def _check_byte(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"{name} must be an integer between 0 and 255, got {value!r}")


def _check_char(value: Any, name: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")


def _check_text(value: Any, name: str, limit: int) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    if len(value.encode("utf-8")) > limit:
        raise ValueError(f"{name} is longer than {limit} bytes")


def checksum(payload: str) -> int:
    """XOR of every byte of the payload."""
    return functools.reduce(operator.xor, payload.encode("utf-8"), 0)


def set_id(panel_id: int) -> str:
    """Command that assigns an ID to the panel."""
    _check_byte(panel_id, "panel id")
    return f"<ID><{panel_id:02X}><E>"


class Command(ABC):
    """A payload that can be framed into a panel command."""

    @abstractmethod
    def __str__(self) -> str:
        """The unframed payload."""

    def command(self, panel_id: int) -> str:
        """Frame the payload with panel ID and checksum."""
        _check_byte(panel_id, "panel id")
        payload = str(self)
        if len(payload.encode("utf-8")) > COMMAND_STRING_SIZE - CHECKSUM_STRING_SIZE:
            raise ValueError("command payload too long")
        framed = f"<ID{panel_id:02X}>{payload}{checksum(payload):02X}<E>"
        if len(framed.encode("utf-8")) > COMMAND_STRING_SIZE:
            raise ValueError("command too long")
        return framed


@dataclass(frozen=True)
class DeleteAll(Command):
    """Delete every page and schedule on the panel."""

    def __str__(self) -> str:
        return "<D*>"


@dataclass(frozen=True)
class DeletePage(Command):
    """Delete one page."""

    id: str = DEFAULT_PAGE
    line: int = DEFAULT_LINE

    def __post_init__(self) -> None:
        _check_char(self.id, "page id")
        _check_byte(self.line, "line")

    def __str__(self) -> str:
        return f"<DL{self.line}P{self.id}>"


@dataclass(frozen=True)
class DeleteSchedule(Command):
    """Delete one schedule."""

    schedule_id: str = DEFAULT_SCHEDULE

    def __post_init__(self) -> None:
        _check_char(self.schedule_id, "schedule id")

    def __str__(self) -> str:
        return f"<DT{self.schedule_id}>"


class _ByteRecord:
    """Mixin for dataclasses whose fields are all single bytes."""

    def __post_init__(self) -> None:
        for item in fields(self):  # type: ignore[arg-type]
            _check_byte(getattr(self, item.name), item.name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        return cls(**{item.name: _require(data, item.name) for item in fields(cls)})  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, int]:
        return asdict(self)  # type: ignore[call-overload]


@dataclass(frozen=True)
class DateTime(_ByteRecord, Command):
    """Setting for the panel's real-time clock."""

    year: int = 0
    week: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __str__(self) -> str:
        return (
            f"<SC>{self.year:02}{self.week:02}{self.month:02}{self.day:02}"
            f"{self.hour:02}{self.minute:02}{self.second:02}"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DateTime:
        return super().from_dict(data)

    def to_dict(self) -> dict[str, int]:
        return super().to_dict()


@dataclass(frozen=True)
class ScheduleDateTime(_ByteRecord):
    """A point in time bounding a schedule."""

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0

    def __str__(self) -> str:
        return f"{self.year:02}{self.month:02}{self.day:02}{self.hour:02}{self.minute:02}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ScheduleDateTime:
        return super().from_dict(data)

    def to_dict(self) -> dict[str, int]:
        return super().to_dict()


@dataclass(frozen=True)
class Schedule(Command):
    """Shows the listed pages between two points in time."""

    id: str
    start: ScheduleDateTime
    end: ScheduleDateTime
    pages: str

    def __post_init__(self) -> None:
        _check_char(self.id, "schedule id")
        for name in ("start", "end"):
            if not isinstance(getattr(self, name), ScheduleDateTime):
                raise TypeError(f"{name} must be a ScheduleDateTime")
        _check_text(self.pages, "pages", MAX_SCHEDULE_PAGES)

    def __str__(self) -> str:
        return f"<T{self.id}>{self.start}{self.end}{self.pages}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Schedule:
        return cls(
            id=_require(data, "id"),
            start=ScheduleDateTime.from_dict(_require(data, "from")),
            end=ScheduleDateTime.from_dict(_require(data, "to")),
            pages=_require(data, "pages"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "from": self.start.to_dict(),
            "to": self.end.to_dict(),
            "pages": self.pages,
        }