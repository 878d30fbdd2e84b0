from datetime import datetime

import pytest
from pydantic import ValidationError

from calculators import evaluate
from parsers import NotificationParser, parse_notifications

NOW = datetime(2024, 6, 1, 12, 0)


@pytest.fixture
def parser():
    return NotificationParser()


def test_single_block_populates_every_field(parser):
    text = "3月15日 10:30 您的包裹已到\n【丰巢】请凭取件码1234取件\n免费保管18小时"

    records = parser.parse(text, NOW)

    assert len(records) == 1
    record = records[0]
    assert record.arrival_timestamp == datetime(2024, 3, 15, 10, 30)
    assert record.locker_name == "丰巢"
    assert record.pickup_code == "1234"
    assert record.free_hours_override == 18
    assert record.raw_text == "3月15日 10:30 您的包裹已到\n【丰巢】请凭取件码1234取件\n免费保管18小时"


def test_text_without_timestamps_gives_no_records(parser):
    assert parser.parse("【丰巢】取件码1234\n免费保管18小时", NOW) == []
    assert parser.parse("", NOW) == []
    assert parser.parse("\n\n   \n", NOW) == []


def test_each_timestamp_line_starts_a_new_record(parser):
    text = "3月15日 10:30\n【丰巢】取件码1111\n3月16日 8:05\n【蜜罐】取件码2222"

    first, second = parser.parse(text, NOW)

    assert (first.locker_name, first.pickup_code) == ("丰巢", "1111")
    assert first.arrival_timestamp == datetime(2024, 3, 15, 10, 30)
    assert (second.locker_name, second.pickup_code) == ("蜜罐", "2222")
    assert second.arrival_timestamp == datetime(2024, 3, 16, 8, 5)
    assert second.free_hours_override is None
    assert "1111" not in second.raw_text


def test_records_keep_timestamp_order(parser):
    text = "5月2日 9:00\n取件码1\n\n1月1日 9:00\n取件码2\n\n3月3日 9:00\n取件码3"

    codes = [record.pickup_code for record in parser.parse(text, NOW)]

    assert codes == ["1", "2", "3"]


def test_last_match_wins_within_a_block(parser):
    text = "3月15日 10:30\n【丰巢】取件码1111 保管18小时\n【蜜罐】取件码2222 保管72小时"

    record, = parser.parse(text, NOW)

    assert record.locker_name == "蜜罐"
    assert record.pickup_code == "2222"
    assert record.free_hours_override == 72


def test_fields_on_the_timestamp_line_belong_to_the_new_record(parser):
    text = "3月15日 10:30 【丰巢】取件码1111\n3月16日 11:00 【蜜罐】取件码2222"

    first, second = parser.parse(text, NOW)

    assert (first.locker_name, first.pickup_code) == ("丰巢", "1111")
    assert (second.locker_name, second.pickup_code) == ("蜜罐", "2222")


def test_lines_before_first_timestamp_are_discarded(parser):
    text = "【和驿智能柜】取件码9999\n3月15日 10:30\n取件码1234"

    record, = parser.parse(text, NOW)

    assert record.locker_name == ""
    assert record.pickup_code == "1234"
    assert "9999" not in record.raw_text


def test_missing_fields_stay_empty(parser):
    record, = parser.parse("3月15日 10:30", NOW)

    assert record.locker_name == ""
    assert record.pickup_code == ""
    assert record.free_hours_override is None
    assert record.raw_text == "3月15日 10:30"


def test_blank_lines_and_padding_are_ignored(parser):
    text = "\r\n\r\n   3月15日 10:30   \r\n\r\n  取件码9  \r\n"

    record, = parser.parse(text, NOW)

    assert record.raw_text == "3月15日 10:30\n取件码9"
    assert record.pickup_code == "9"


def test_timestamp_without_space_is_recognised(parser):
    record, = parser.parse("3月15日10:30【丰巢】", NOW)

    assert record.arrival_timestamp == datetime(2024, 3, 15, 10, 30)
    assert record.locker_name == "丰巢"


def test_leap_day_in_non_leap_year_still_starts_a_new_record(parser):
    text = "2月28日 10:00\n【丰巢】取件码1111\n2月29日 09:00\n【蜜罐】取件码2222"

    first, second = parser.parse(text, datetime(2025, 3, 1))

    assert (first.locker_name, first.pickup_code) == ("丰巢", "1111")
    assert first.arrival_timestamp == datetime(2025, 2, 28, 10, 0)
    assert (second.locker_name, second.pickup_code) == ("蜜罐", "2222")
    assert second.arrival_timestamp == datetime(2025, 3, 1, 9, 0)


@pytest.mark.parametrize("line, expected", [
    ("2月30日 10:30", datetime(2024, 3, 1, 10, 30)),
    ("3月15日 25:00", datetime(2024, 3, 16, 1, 0)),
    ("3月15日 10:75", datetime(2024, 3, 15, 11, 15)),
    ("13月1日 8:00", datetime(2025, 1, 1, 8, 0)),
    ("0月31日 8:00", datetime(2023, 12, 31, 8, 0)),
    ("3月0日 8:00", datetime(2024, 2, 29, 8, 0)),
])
def test_out_of_range_timestamp_rolls_over(parser, line, expected):
    record, = parser.parse(f"{line} 取件码77", NOW)

    assert record.arrival_timestamp == expected
    assert record.pickup_code == "77"


def test_oversized_free_hours_figure_is_ignored(parser):
    text = "3月15日 10:30\n免费保管18小时\n" + "9" * 5000 + "小时\n" + "9" * 400 + "小时"

    record, = parser.parse(text, NOW)

    assert record.free_hours_override == 18


def test_oversized_free_hours_figure_can_still_be_evaluated(parser):
    record, = parser.parse("3月15日 10:30\n" + "9" * 400 + "小时", NOW)

    status = evaluate(record, {"丰巢": 18}, NOW)

    assert record.free_hours_override is None
    assert status.effective_free_hours == 0
    assert status.is_overdue is True


def test_year_comes_from_now(parser):
    record, = parser.parse("12月31日 23:59", datetime(2025, 1, 2, 8, 0))

    # Known approximation: a December parcel parsed in January lands in the new year
    assert record.arrival_timestamp == datetime(2025, 12, 31, 23, 59)


def test_each_record_gets_a_unique_id(parser):
    records = parser.parse("3月15日 10:30\n3月15日 10:30\n3月15日 10:30", NOW)

    assert len({record.id for record in records}) == 3


def test_records_are_read_only(parser):
    record, = parser.parse("3月15日 10:30", NOW)

    with pytest.raises(ValidationError):
        record.pickup_code = "changed"


def test_parse_notifications_shortcut():
    records = parse_notifications("3月15日 10:30\n【丰巢】取件码1234", NOW)

    assert [(r.locker_name, r.pickup_code) for r in records] == [("丰巢", "1234")]
