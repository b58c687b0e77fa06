"""Date/time insertion formats and their expansion into text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

DATE_TIME_FORMATS: tuple[str, ...] = (
    "yyyy-MM-dd",
    "yyyy년 MM월 dd일",
    "MM/dd/yyyy",
    "dd/MM/yyyy",
    "yyyy-MM-dd HH:mm:ss",
    "yyyy년 MM월 dd일 HH시 mm분",
    "HH:mm:ss",
    "HH:mm",
    "h:mm tt",
    "dddd, MMMM d, yyyy",
    "MMMM d, yyyy",
    "d MMMM yyyy",
)

_DAY_NAMES = ("일요일", "월요일", "화요일", "수요일", "목요일", "금요일", "토요일")
_MONTH_NAMES = (
    "", "1월", "2월", "3월", "4월", "5월", "6월",
    "7월", "8월", "9월", "10월", "11월", "12월",
)


def _sunday_based_weekday(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


# Substitutions are applied one after another in this order; each token is
# replaced left to right and inserted text is never rescanned.
_SUBSTITUTIONS: tuple[tuple[str, Callable[[datetime], str]], ...] = (
    ("yyyy", lambda m: f"{m.year:04d}"),
    ("MM", lambda m: f"{m.month:02d}"),
    ("dd", lambda m: f"{m.day:02d}"),
    ("HH", lambda m: f"{m.hour:02d}"),
    ("mm", lambda m: f"{m.minute:02d}"),
    ("ss", lambda m: f"{m.second:02d}"),
    ("dddd", lambda m: _DAY_NAMES[_sunday_based_weekday(m)]),
    ("MMMM", lambda m: _MONTH_NAMES[m.month]),
    ("d", lambda m: f"{m.day}"),
)


@dataclass
class DateTimeOptions:
    """The text chosen for insertion and whether it should update itself."""

    format: str = ""
    auto_update: bool = False


def format_date_time(fmt: str, moment: Optional[datetime] = None) -> str:
    """Expand the date/time tokens of ``fmt`` for ``moment`` (default: now, local time)."""
    if moment is None:
        moment = datetime.now()
    result = fmt
    for token, value in _SUBSTITUTIONS:
        if token in result:
            result = result.replace(token, value(moment))
    return result


def preview_formats(moment: Optional[datetime] = None) -> list[str]:
    """Every entry of DATE_TIME_FORMATS expanded for the same moment."""
    if moment is None:
        moment = datetime.now()
    return [format_date_time(fmt, moment) for fmt in DATE_TIME_FORMATS]