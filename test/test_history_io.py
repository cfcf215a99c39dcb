from datetime import date

import pytest

from themepark.facilities import history_io
from themepark.facilities.ride import Ride
from themepark.visitors.base import Visitor

DAY = date(2025, 12, 1)
HEADER = "Name,Age,ContactNumber,TicketId,VisitDate"


@pytest.mark.parametrize("ride_name, expected", [
    ("Giant Ferris Wheel", "Giant_Ferris_Wheel_RideHistory_2025-12-01.txt"),
    ("Merry-Go-Round", "Merry_Go_Round_RideHistory_2025-12-01.txt"),
    ("Café Ride!", "Caf__Ride__RideHistory_2025-12-01.txt"),
    ("snake_case_9", "snake_case_9_RideHistory_2025-12-01.txt"),
])
def test_filename_is_sanitized_ride_name_plus_date(ride_name, expected):
    assert history_io.history_filename(ride_name, DAY) == expected


def test_export_writes_header_and_rows_in_history_order(tmp_path, operator):
    ride = Ride("Giant Ferris Wheel", 6, operator)
    ride.add_to_history(Visitor("Emma Thomas", 27, "555-7777", "TICKET025", "2025-11-26"))
    ride.add_to_history(Visitor("Olivia Martinez", 24, "555-5555", "TICKET023", "2025-11-25"))

    path = ride.export_history(out_dir=str(tmp_path), today=DAY)

    assert path == str(tmp_path / "Giant_Ferris_Wheel_RideHistory_2025-12-01.txt")
    lines = (tmp_path / "Giant_Ferris_Wheel_RideHistory_2025-12-01.txt").read_text(encoding="utf-8").splitlines()
    assert lines == [
        HEADER,
        "Emma Thomas,27,555-7777,TICKET025,2025-11-26",
        "Olivia Martinez,24,555-5555,TICKET023,2025-11-25",
    ]


def test_export_of_empty_history_writes_nothing(tmp_path, ride, capsys):
    assert ride.export_history(out_dir=str(tmp_path), today=DAY) is None
    assert list(tmp_path.iterdir()) == []
    assert "Cannot export empty ride history!" in capsys.readouterr().out


def test_export_same_day_overwrites(tmp_path, ride, make_visitor):
    ride.add_to_history(make_visitor("T1"))
    ride.add_to_history(make_visitor("T2"))
    first = ride.export_history(out_dir=str(tmp_path), today=DAY)

    fresh = Ride(ride.name, 4)
    fresh.add_to_history(make_visitor("T9"))
    second = fresh.export_history(out_dir=str(tmp_path), today=DAY)

    assert first == second
    assert len(list(tmp_path.iterdir())) == 1
    assert (tmp_path / "Velocity_X_RideHistory_2025-12-01.txt").read_text(encoding="utf-8").count("\n") == 2


def test_export_into_missing_directory_fails_without_raising(tmp_path, ride, make_visitor, capsys):
    ride.add_to_history(make_visitor("T1"))
    assert ride.export_history(out_dir=str(tmp_path / "does" / "not" / "exist"), today=DAY) is None
    assert "Error exporting ride history" in capsys.readouterr().out


def test_commas_inside_values_are_not_escaped(make_visitor):
    line = history_io.encode_visitor(Visitor("Doe, Jane", 30, "555", "T1", "2025-11-21"))
    assert line == "Doe, Jane,30,555,T1,2025-11-21"
    # known limitation: that row no longer has five fields
    visitor, reason = history_io.decode_line(line)
    assert visitor is None
    assert "field count" in reason


# ---------- import ----------

def write(tmp_path, *lines, name="history.txt"):
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_import_validates_each_line(tmp_path, operator, capsys):
    path = write(
        tmp_path,
        HEADER,
        "Alice,30,555-1,T1,2025-11-21",
        "   ",
        "Bob,abc,555-2,T2,2025-11-21",
        "Carl,20,555-3,T3,2025/11/21",
        ",20,555-4,T4,2025-11-21",
        "Dina,-1,555-5,T5,2025-11-21",
        "Eve,20,555-6,T6",
        "Finn,20,555-7,T7,2025-02-30",
        "Gil, 41 ,555-8, T8 ,2025-11-22",
        "Hal,4.5,555-9,T9,2025-11-22",
    )
    ride = Ride("Merry-Go-Round", 8, operator)

    imported = ride.import_history(path)

    assert imported == 2
    report = ride.last_import_report
    assert report.ok
    assert report.skipped == 8
    assert report.lines_processed == 10
    assert len(report.rejections) == 7
    assert report.rejections[0] == "Line 4: Invalid age format (abc) - Must be an integer, skipped"
    assert [(v.name, v.age, v.ticket_id) for v in ride.history_snapshot()] == [
        ("Alice", 30, "T1"),
        ("Gil", 41, "T8"),
    ]
    out = capsys.readouterr().out
    assert "Line 3: Empty line, skipped" in out
    assert "Line 4: Invalid age format (abc) - Must be an integer, skipped" in out
    assert "Line 5: Invalid visit date format (2025/11/21), must be YYYY-MM-DD, skipped" in out
    assert "Line 6: Mandatory fields (Name/TicketID/VisitDate) cannot be empty, skipped" in out
    assert "Line 7: Invalid age - Cannot be negative (-1), skipped" in out
    assert "Line 8: Invalid field count (4/5 required), skipped" in out
    assert "Line 9: Invalid visit date format (2025-02-30)" in out


def test_non_numeric_age_creates_no_record(tmp_path):
    report = history_io.read_history(write(tmp_path, HEADER, "Bob,abc,555,T2,2025-11-21"))
    assert report.imported == 0
    assert report.skipped == 1
    assert report.visitors == []


def test_first_line_is_skipped_even_if_it_is_data(tmp_path):
    report = history_io.read_history(write(
        tmp_path,
        "Alice,30,555,T1,2025-11-21",
        "Bob,31,555,T2,2025-11-21",
    ))
    assert [v.ticket_id for v in report.visitors] == ["T2"]


def test_trailing_empty_fields_are_ignored(tmp_path):
    report = history_io.read_history(write(
        tmp_path,
        HEADER,
        "Bob,31,555,T2,2025-11-21,",
        "Cat,32,555,T3,2025-11-21,,,",
        "Dan,33,555,T4,",
        "Eli,34,555,T5,2025-11-21, ,",
    ))
    assert [v.ticket_id for v in report.visitors] == ["T2", "T3"]
    assert report.skipped == 2
    assert report.rejections == [
        "Line 4: Invalid field count (4/5 required), skipped",
        "Line 5: Invalid field count (6/5 required), skipped",
    ]


@pytest.mark.parametrize("age_text", ["2147483648", "99999999999", "-2147483649"])
def test_age_outside_32_bit_range_is_rejected(age_text):
    visitor, reason = history_io.decode_line(f"Big,{age_text},555,T1,2025-11-21")
    assert visitor is None
    assert reason == f"Invalid age format ({age_text}) - Must be an integer"


def test_largest_32_bit_age_is_accepted():
    visitor, _ = history_io.decode_line("Old,2147483647,555,T1,2025-11-21")
    assert visitor.age == 2147483647


def test_date_field_is_checked_before_mandatory_fields():
    visitor, reason = history_io.decode_line(",abc,555,, ")
    assert visitor is None
    assert reason.startswith("Invalid visit date format")


def test_import_does_not_dedupe_against_existing_history(tmp_path, ride, make_visitor):
    ride.add_to_history(make_visitor("T1"))
    path = write(tmp_path, HEADER, "Again,50,555,T1,2025-11-21", "Again,50,555,T1,2025-11-21")

    assert ride.import_history(path) == 2
    assert ride.history_size() == 3
    assert [v.ticket_id for v in ride.history_snapshot()] == ["T1", "T1", "T1"]


@pytest.mark.parametrize("bad_path", [None, "", "   "])
def test_import_with_empty_path(ride, bad_path, capsys):
    assert ride.import_history(bad_path) == 0
    assert ride.last_import_report.error == "File path cannot be empty!"
    assert "File path cannot be empty!" in capsys.readouterr().out


def test_import_of_missing_file_reports_and_returns_zero(tmp_path, ride, make_visitor):
    ride.add_to_history(make_visitor("T1"))

    assert ride.import_history(tmp_path / "missing.txt") == 0

    assert ride.last_import_report.error.startswith("Error importing file")
    assert ride.history_size() == 1


def test_import_of_undecodable_file_keeps_history_untouched(tmp_path, ride):
    path = tmp_path / "latin1.txt"
    path.write_bytes((HEADER + "\nJos\xe9,30,555,T1,2025-11-21\n").encode("latin-1"))

    assert ride.import_history(path) == 0
    assert ride.last_import_report.error is not None
    assert ride.history_size() == 0


def test_round_trip_keeps_tickets_and_fields(tmp_path, operator):
    source = Ride("Giant Ferris Wheel", 6, operator)
    originals = [
        Visitor("Olivia Martinez", 24, "555-5555", "TICKET023", "2025-11-25"),
        Visitor("Zoë Ångström", 31, "+46 555 66", "TICKET024", "2025-11-25"),
        Visitor("李小龙", 27, "", "TICKET025", "2025-11-26"),
        Visitor("Noah Hernandez", 0, "555-8888", "TICKET026", "2025-11-26"),
    ]
    for v in originals:
        source.add_to_history(v)
    source.sort_history()
    path = source.export_history(out_dir=str(tmp_path), today=DAY)

    target = Ride("Merry-Go-Round", 8, operator)
    assert target.import_history(path) == len(originals)

    assert set(target.history_snapshot()) == set(originals)
    assert target.last_import_report.skipped == 0
