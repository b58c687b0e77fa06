from datetime import datetime

import pytest

from cdmkit.datetime_format import (
    DATE_TIME_FORMATS,
    DateTimeOptions,
    format_date_time,
    preview_formats,
)

MOMENT = datetime(2024, 3, 5, 14, 7, 9)


@pytest.mark.parametrize(
    "fmt, strftime_fmt",
    [
        ("yyyy-MM-dd", "%Y-%m-%d"),
        ("MM/dd/yyyy", "%m/%d/%Y"),
        ("dd/MM/yyyy", "%d/%m/%Y"),
        ("yyyy-MM-dd HH:mm:ss", "%Y-%m-%d %H:%M:%S"),
        ("HH:mm:ss", "%H:%M:%S"),
        ("HH:mm", "%H:%M"),
        ("yyyy년 MM월 dd일", "%Y년 %m월 %d일"),
        ("yyyy년 MM월 dd일 HH시 mm분", "%Y년 %m월 %d일 %H시 %M분"),
    ],
)
def test_numeric_formats_match_strftime(fmt, strftime_fmt):
    assert format_date_time(fmt, MOMENT) == MOMENT.strftime(strftime_fmt)


def test_single_d_gives_unpadded_day_after_month_digits():
    assert format_date_time("d MMMM yyyy", MOMENT) == "5 0303 2024"


def test_twelve_hour_tokens_left_untouched():
    assert format_date_time("h:mm tt", MOMENT) == "h:07 tt"


def test_long_names_expand_through_numeric_tokens():
    assert format_date_time("dddd, MMMM d, yyyy", MOMENT) == "0505, 0303 5, 2024"


def test_text_without_tokens_is_unchanged():
    assert format_date_time("plain text!", MOMENT) == "plain text!"


def test_default_moment_is_now():
    before = datetime.now()
    result = format_date_time("yyyy")
    after = datetime.now()
    assert result in {f"{before.year:04d}", f"{after.year:04d}"}


def test_preview_formats_covers_every_format():
    previews = preview_formats(MOMENT)
    assert len(previews) == len(DATE_TIME_FORMATS)
    assert previews == [format_date_time(fmt, MOMENT) for fmt in DATE_TIME_FORMATS]
    assert previews[0] == MOMENT.strftime("%Y-%m-%d")


def test_options_hold_formatted_choice():
    options = DateTimeOptions(format=format_date_time(DATE_TIME_FORMATS[6], MOMENT), auto_update=True)
    assert options.format == MOMENT.strftime("%H:%M:%S")
    assert options.auto_update is True