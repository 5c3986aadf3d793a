"""Tests untuk dashboard, rekap dan kalender."""

import asyncio
from datetime import date

import pytest

from src.core.exceptions import ValidationFailed
from src.models.enums import ActivityType
from src.services.dashboard import DashboardService
from src.utils.dates import timeline_status


@pytest.fixture
def dashboard_service(loaded_store):
    return DashboardService(loaded_store)


def test_summary_for_super_admin(dashboard_service, super_admin):
    summary = asyncio.run(dashboard_service.get_summary(super_admin))

    assert summary.stats.assigned == 2
    assert summary.stats.unassigned == 1
    assert summary.stats.active_surat == 3
    assert summary.stats.avg_discipline == pytest.approx(64.17)
    assert summary.discipline_distribution == {
        "Sangat Baik (>90%)": 1,
        "Cukup (60-75%)": 1,
        "Kurang (<60%)": 1,
    }
    assert summary.units == ["Unit A", "Unit B"]
    assert summary.pending_reports == []


def test_summary_for_staff(dashboard_service, budi):
    summary = asyncio.run(dashboard_service.get_summary(budi))
    assert summary.stats.active_surat == 1
    assert [task.letter_number for task in summary.pending_reports] == ["LTR-1"]


def test_summary_filters(dashboard_service, super_admin):
    by_unit = asyncio.run(dashboard_service.get_summary(super_admin, unit="Unit B"))
    assert (by_unit.stats.assigned, by_unit.stats.unassigned) == (1, 0)
    assert by_unit.stats.avg_discipline == pytest.approx(72.5)

    nothing = asyncio.run(dashboard_service.get_summary(super_admin, search="tidak ada"))
    assert nothing.stats.active_surat == 0
    assert nothing.stats.avg_discipline == 0.0
    assert nothing.discipline_distribution == {}


def test_recap_sorted_newest_first(dashboard_service, super_admin):
    recap = asyncio.run(dashboard_service.get_recap(super_admin, today=date(2026, 2, 2)))
    letters = [item.surat_tugas.letter_number for item in recap.items]
    assert letters == ["ST/002/2026", "LTR-1", "ST/001/2026"]

    badges = {item.surat_tugas.letter_number: item.timeline_status for item in recap.items}
    assert badges == {
        "ST/002/2026": "Akan Selesai",
        "LTR-1": "Akan Selesai",
        "ST/001/2026": "Selesai",
    }


def test_recap_badge_ongoing(dashboard_service, super_admin):
    recap = asyncio.run(dashboard_service.get_recap(super_admin, today=date(2026, 1, 10)))
    item = next(i for i in recap.items if i.surat_tugas.letter_number == "ST/001/2026")
    assert item.timeline_status == "Masih Aktif"
    assert item.days_remaining == 12


@pytest.mark.parametrize("end_offset, expected", [
    (-1, "Selesai"),
    (0, "Akan Selesai"),
    (2, "Akan Selesai"),
    (3, "Masih Aktif"),
])
def test_timeline_badge_boundaries(end_offset, expected):
    today = date(2026, 2, 2)
    end = date.fromordinal(today.toordinal() + end_offset)
    badge = timeline_status(end, today)
    assert badge["status"] == expected
    assert badge["days_remaining"] == end_offset


def test_recap_filters(dashboard_service, super_admin):
    by_name = asyncio.run(dashboard_service.get_recap(super_admin, name="sari"))
    assert [i.surat_tugas.letter_number for i in by_name.items] == ["ST/001/2026"]

    by_unit = asyncio.run(dashboard_service.get_recap(super_admin, unit="Unit B"))
    assert {i.surat_tugas.letter_number for i in by_unit.items} == {"ST/001/2026", "ST/002/2026"}

    by_type = asyncio.run(dashboard_service.get_recap(super_admin, activity_type=ActivityType.DARING))
    assert by_type.total == 1


def test_calendar_month(dashboard_service):
    month = asyncio.run(dashboard_service.get_calendar_month(2026, 2))
    assert len(month.days) == 28
    second = month.days[1]
    assert second.day == date(2026, 2, 2)
    assert [t.letter_number for t in second.active_tasks] == ["LTR-1", "ST/002/2026"]
    assert second.unassigned_count == 1
    assert second.all_assigned is False


def test_calendar_invalid_month(dashboard_service):
    with pytest.raises(ValidationFailed):
        asyncio.run(dashboard_service.get_calendar_month(2026, 13))


@pytest.mark.parametrize("year", [0, 10000, -1])
def test_calendar_invalid_year(dashboard_service, year):
    with pytest.raises(ValidationFailed):
        asyncio.run(dashboard_service.get_calendar_month(year, 1))


def test_calendar_day_detail(dashboard_service):
    detail = asyncio.run(dashboard_service.get_calendar_day(date(2026, 1, 21)))
    assert [t.letter_number for t in detail.active_tasks] == ["ST/001/2026"]
    assert [emp.nip for emp in detail.unassigned] == ["123"]
    assert [emp.name for emp in detail.active_tasks[0].employees] == ["Sari", "Andi"]
