import datetime as dt

from screens.students.viewer import attendance_summary, month_bounds, records_in_range

RECORDS = [
    {"date": "2024-05-02T00:00:00.000Z", "status": "present", "remarks": ""},
    {"date": "2024-05-01", "status": "absent", "remarks": "fever"},
    {"date": "2024-05-03", "status": "present"},
    {"date": "2024-05-20", "status": "late"},
    {"date": "2024-04-30", "status": "present"},
    {"date": "not a date", "status": "present"},
    {"status": "present"},
]

MAY = (dt.date(2024, 5, 1), dt.date(2024, 5, 31))


def test_range_is_inclusive_and_sorted():
    rows = records_in_range(RECORDS, *MAY)
    assert [r["date"] for r in rows] == ["2024-05-01", "2024-05-02", "2024-05-03", "2024-05-20"]


def test_summary_counts_and_rounding():
    assert attendance_summary(RECORDS, *MAY) == {
        "total": 4, "present": 2, "absent": 1, "late": 1, "present_percent": 50,
    }
    three = RECORDS[:3]
    assert attendance_summary(three, *MAY)["present_percent"] == 67


def test_half_rounds_up():
    records = [{"date": f"2024-05-0{i}", "status": "present" if i == 1 else "absent"} for i in range(1, 9)]
    assert attendance_summary(records, *MAY)["present_percent"] == 13


def test_empty_range_is_zero_percent():
    summary = attendance_summary(RECORDS, dt.date(2023, 1, 1), dt.date(2023, 1, 31))
    assert summary["total"] == 0 and summary["present_percent"] == 0


def test_month_bounds_default_range():
    assert month_bounds(dt.date(2024, 2, 14)) == (dt.date(2024, 2, 1), dt.date(2024, 2, 29))
    assert month_bounds(dt.date(2023, 12, 5)) == (dt.date(2023, 12, 1), dt.date(2023, 12, 31))
