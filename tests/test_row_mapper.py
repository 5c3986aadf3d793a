"""Tests untuk mapping baris spreadsheet."""

from datetime import date

from src.models.enums import ActivityType, FundingType, ReportStatus, ScheduleLayout, SourceKind
from src.services.row_mapper import RowMapper, parse_photos


def test_roster_defaults_and_leading_zeros():
    record = RowMapper().map_roster(["007"])
    assert record.nip == "007"
    assert record.name == "Pegawai"
    assert record.position == "-"
    assert record.unit == "-"


def test_rows_without_key_are_dropped():
    rows = [["NIP", "Nama"], ["", "Tanpa NIP"], ["123", "Budi"]]
    records = RowMapper().map_rows(SourceKind.ROSTER, rows)
    assert [r.nip for r in records] == ["123"]


def test_schedule_compact_layout():
    row = ["123", "LTR-1", "daring", "Webinar", "Zoom", "20/01/2026", "2026-01-22", "Kepala", "biaya bpmp", "DIPA"]
    record = RowMapper().map_schedule(row)
    assert record.letter_number == "LTR-1"
    assert record.activity_type == ActivityType.DARING
    assert record.start_date == date(2026, 1, 20)
    assert record.end_date == date(2026, 1, 22)
    assert record.funding_type == FundingType.BIAYA_BPMP
    assert record.basis == "DIPA"


def test_schedule_defaults():
    record = RowMapper().map_schedule(["123", "LTR-1", "Hybrid", "", "", "kemarin", ""])
    assert record.activity_type == ActivityType.LURING
    assert record.description == "-"
    assert record.start_date is None
    assert record.end_date is None
    assert record.funding_type is None
    assert record.signee == "-"


def test_schedule_jadwal_tugas_layout_skips_name_column():
    row = ["123", "Budi", "LTR-1", "Luring", "Workshop", "City Hall", "2026-02-01", "2026-02-03", "Director"]
    record = RowMapper(ScheduleLayout.JADWAL_TUGAS).map_schedule(row)
    assert record.nip == "123"
    assert record.letter_number == "LTR-1"
    assert record.description == "Workshop"
    assert record.end_date == date(2026, 2, 3)


def test_schedule_row_without_letter_number_is_skipped():
    assert RowMapper().map_schedule(["123", ""]) is None


def test_discipline_lenient_numbers():
    record = RowMapper().map_discipline(["123", "85,5", "90%", "abc", ""])
    assert record.attendance == 85.5
    assert record.assembly == 90.0
    assert record.daily_log == 0.0
    assert record.report == 0.0


def test_report_row():
    row = ["ST/001/2026", "Sudah dilaksanakan", "2026-01-23", "456", '["a.jpg","b.jpg"]', "terverifikasi"]
    record = RowMapper().map_report(row)
    assert record.details_raw == "Sudah dilaksanakan"
    assert record.creator_nip == "456"
    assert record.photos == ["a.jpg", "b.jpg"]
    assert record.status == ReportStatus.VERIFIED


def test_report_row_without_status_or_photos():
    record = RowMapper().map_report(["ST/001/2026"])
    assert record.photos == []
    assert record.status is None
    assert record.report_date is None


def test_parse_photos_single_link_and_broken_json():
    assert parse_photos("https://drive.example/foto.jpg") == ["https://drive.example/foto.jpg"]
    assert parse_photos("[not json") == ["[not json"]
    assert parse_photos("") == []
