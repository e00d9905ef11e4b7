from datetime import date, datetime

import pytest

from src.geo_attendance.geo_attendance.attendance.model import AttendanceRecord
from src.geo_attendance.geo_attendance.core.enums import StatusDetail
from src.geo_attendance.geo_attendance.core.exceptions import GeofenceError, NotFoundError, ValidationError

OFFICE = dict(latitude=-6.2088, longitude=106.8456)
# Roughly 1.1 km south of the office.
FAR_AWAY = dict(latitude=-6.2188, longitude=106.8456)


def test_check_in_on_time_stores_utc_naive_row(services, at_jakarta):
    result = services.attendance_service.check_in(1, **OFFICE, face_match_score=91.5, now=at_jakarta(2025, 1, 6, 9, 5))

    assert result.decision.status_detail == StatusDetail.ON_TIME
    assert result.message == "Check-in berhasil!"

    stored = services.attendance_repo.records[result.attendance_id]
    assert stored.check_in_time == datetime(2025, 1, 6, 2, 5)
    assert stored.status == "present"
    assert stored.notes == "Tepat waktu (masuk 5 menit setelah jam mulai)"
    assert stored.face_match_score == 91.5
    assert stored.office_location_id == 1
    assert result.to_dict()["work_schedule"] == "09:00 - 17:00"


def test_check_in_late(services, at_jakarta):
    result = services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 45))

    assert result.decision.status_detail == StatusDetail.LATE
    assert result.decision.late_minutes == 45
    assert result.message == "Check-in berhasil (Terlambat 45 menit)"
    assert services.attendance_repo.records[result.attendance_id].status == "late"


def test_check_in_uses_explicit_location_id(services, at_jakarta):
    branch = services.location_service.create(name="Cabang", latitude=-6.3, longitude=106.9, is_active=False)

    result = services.attendance_service.check_in(
        1, **OFFICE, location_id=str(branch.location_id), now=at_jakarta(2025, 1, 6, 9, 0)
    )

    assert services.attendance_repo.records[result.attendance_id].office_location_id == branch.location_id


def test_check_in_rejects_unknown_location_id(services, at_jakarta):
    with pytest.raises(NotFoundError, match="Lokasi kantor tidak ditemukan"):
        services.attendance_service.check_in(1, **OFFICE, location_id=7, now=at_jakarta(2025, 1, 6, 9, 0))

    assert services.attendance_repo.records == {}


@pytest.mark.parametrize("location_id", ["kantor", True, [1]])
def test_check_in_rejects_malformed_location_id(services, at_jakarta, location_id):
    with pytest.raises(ValidationError, match="location_id tidak valid"):
        services.attendance_service.check_in(1, **OFFICE, location_id=location_id, now=at_jakarta(2025, 1, 6, 9, 0))


def test_naive_now_is_taken_as_utc(services):
    svc = services.attendance_service

    # 02:05 UTC is 09:05 in Jakarta.
    check_in = svc.check_in(1, **OFFICE, now=datetime(2025, 1, 6, 2, 5))
    check_out = svc.check_out(1, **OFFICE, now=datetime(2025, 1, 6, 10, 0))

    stored = services.attendance_repo.records[check_in.attendance_id]
    assert stored.check_in_time == datetime(2025, 1, 6, 2, 5)
    assert stored.check_out_time == datetime(2025, 1, 6, 10, 0)
    assert check_in.decision.status_detail == StatusDetail.ON_TIME
    assert check_out.to_dict()["worked_hours"] == "07:55"


def test_check_in_rejects_face_score_below_threshold(services, at_jakarta):
    with pytest.raises(ValidationError, match=r"Verifikasi wajah gagal \(skor 79.5%, minimal 80%\)"):
        services.attendance_service.check_in(1, **OFFICE, face_match_score=79.5, now=at_jakarta(2025, 1, 6, 9, 0))

    # The threshold itself passes.
    services.attendance_service.check_in(1, **OFFICE, face_match_score=80, now=at_jakarta(2025, 1, 6, 9, 0))


def test_face_threshold_follows_settings(services, at_jakarta):
    services.settings_service.update({"face_recognition_threshold": 95})

    with pytest.raises(ValidationError, match="minimal 95%"):
        services.attendance_service.check_in(1, **OFFICE, face_match_score=91.5, now=at_jakarta(2025, 1, 6, 9, 0))


@pytest.mark.parametrize("employee_id", [3, 99])
def test_check_in_requires_active_employee(services, at_jakarta, employee_id):
    with pytest.raises(NotFoundError, match="tidak ditemukan atau tidak aktif"):
        services.attendance_service.check_in(employee_id, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))


def test_check_in_requires_coordinates(services, at_jakarta):
    with pytest.raises(ValidationError, match="Lokasi GPS tidak tersedia"):
        services.attendance_service.check_in(1, latitude=None, longitude=106.8, now=at_jakarta(2025, 1, 6, 9, 0))


def test_check_in_rejects_face_score_out_of_range(services, at_jakarta):
    with pytest.raises(ValidationError, match="face_match_score"):
        services.attendance_service.check_in(1, **OFFICE, face_match_score=120, now=at_jakarta(2025, 1, 6, 9, 0))


def test_check_in_outside_geofence_carries_details(services, at_jakarta):
    with pytest.raises(GeofenceError) as exc:
        services.attendance_service.check_in(1, **FAR_AWAY, now=at_jakarta(2025, 1, 6, 9, 0))

    assert "di luar jangkauan kantor" in str(exc.value)
    assert exc.value.details["max_radius"] == 100
    assert exc.value.details["office"] == "Kantor Pusat"
    assert 1000 < exc.value.details["distance"] < 1200
    assert services.attendance_repo.records == {}


def test_check_in_without_active_office(services, at_jakarta):
    services.locations_repo.deactivate_all_except(0)

    with pytest.raises(GeofenceError, match="Tidak ada lokasi kantor aktif"):
        services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))


def test_check_in_on_holiday(services, at_jakarta):
    with pytest.raises(ValidationError, match="Hari ini adalah hari libur: Cuti Bersama"):
        services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 7, 9, 0))


def test_check_in_on_inactive_day(services, at_jakarta):
    with pytest.raises(ValidationError, match=r"Hari ini \(Sabtu\) bukan hari kerja"):
        services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 4, 9, 0))


def test_check_in_without_schedule_row(services, at_jakarta):
    services.schedules_repo.items = {k: v for k, v in services.schedules_repo.items.items() if v.day_of_week != 0}

    with pytest.raises(ValidationError, match="belum dikonfigurasi"):
        services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 5, 9, 0))


def test_check_in_too_early(services, at_jakarta):
    with pytest.raises(ValidationError, match="Terlalu pagi"):
        services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 7, 59))

    # Exactly one hour before start is allowed.
    result = services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 8, 0))
    assert result.decision.status_detail == StatusDetail.ON_TIME


def test_second_check_in_same_day_is_rejected(services, at_jakarta):
    services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))

    with pytest.raises(ValidationError, match="sudah check-in"):
        services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 10, 0))

    # Another employee is unaffected.
    services.attendance_service.check_in(2, **OFFICE, now=at_jakarta(2025, 1, 6, 10, 0))


def test_open_check_in_from_previous_day_does_not_block(services, at_jakarta):
    services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))

    result = services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 8, 9, 0))

    assert result.attendance_id == 2


def test_check_out_without_check_in(services, at_jakarta):
    with pytest.raises(NotFoundError, match="Tidak ada data check-in untuk hari ini"):
        services.attendance_service.check_out(1, **OFFICE, now=at_jakarta(2025, 1, 6, 17, 0))


def test_check_out_closes_todays_record(services, at_jakarta):
    check_in = services.attendance_service.check_in(1, **OFFICE, face_match_score=88, now=at_jakarta(2025, 1, 6, 9, 0))

    result = services.attendance_service.check_out(1, **OFFICE, now=at_jakarta(2025, 1, 6, 17, 30))

    assert result.attendance_id == check_in.attendance_id
    assert result.worked_minutes == 8 * 60 + 30
    assert result.to_dict()["worked_hours"] == "08:30"

    stored = services.attendance_repo.records[check_in.attendance_id]
    assert stored.check_out_time == datetime(2025, 1, 6, 10, 30)
    assert stored.check_out_latitude == OFFICE["latitude"]
    assert stored.face_match_score == 88

    with pytest.raises(NotFoundError):
        services.attendance_service.check_out(1, **OFFICE, now=at_jakarta(2025, 1, 6, 18, 0))


def test_check_out_outside_geofence(services, at_jakarta):
    services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))

    with pytest.raises(GeofenceError):
        services.attendance_service.check_out(1, **FAR_AWAY, now=at_jakarta(2025, 1, 6, 17, 0))


def test_check_out_picks_most_recent_open_record(services, at_jakarta):
    for attendance_id, hour in ((1, 1), (2, 2)):
        services.attendance_repo.add(
            AttendanceRecord(attendance_id=attendance_id, employee_id=1, check_in_time=datetime(2025, 1, 6, hour, 0))
        )

    result = services.attendance_service.check_out(1, **OFFICE, now=at_jakarta(2025, 1, 6, 17, 0))

    assert result.attendance_id == 2
    assert services.attendance_repo.records[1].check_out_time is None


def test_get_today(services, at_jakarta):
    assert services.attendance_service.get_today(1, now=at_jakarta(2025, 1, 6, 12, 0)) == []

    services.attendance_service.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 20))
    [today] = services.attendance_service.get_today(1, now=at_jakarta(2025, 1, 6, 12, 0))

    assert today["check_in_time"] == "2025-01-06 09:20:00"
    assert today["check_out_time"] is None
    assert today["status_detail"] == "within_tolerance"
    assert today["status_label"] == "Dalam Toleransi"
    assert today["tolerance_range"] == "09:15-09:30"
    assert today["full_name"] == "Budi Santoso"


def test_get_today_without_employee_lists_everyone(services, at_jakarta):
    svc = services.attendance_service
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))
    svc.check_in(2, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 50))
    # Previous local day.
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 3, 9, 0))

    rows = svc.get_today(now=at_jakarta(2025, 1, 6, 12, 0))

    assert [(r["employee_code"], r["status_detail"]) for r in rows] == [("EMP002", "late"), ("EMP001", "on_time")]


def test_get_history_classifies_and_summarizes(services, at_jakarta):
    svc = services.attendance_service
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))
    svc.check_in(2, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 50))
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 8, 9, 25))
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 10, 9, 0))

    report = svc.get_history(start=date(2025, 1, 6), end=date(2025, 1, 8))

    assert report.summary == {"total": 3, "on_time": 1, "within_tolerance": 1, "late": 1}
    assert [row["check_in_time"] for row in report.rows] == [
        "2025-01-08 09:25:00",
        "2025-01-06 09:50:00",
        "2025-01-06 09:00:00",
    ]
    late = report.rows[1]
    assert late["employee_code"] == "EMP002"
    assert late["late_minutes"] == 50


def test_get_history_filters_by_employee(services, at_jakarta):
    svc = services.attendance_service
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))
    svc.check_in(2, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))

    report = svc.get_history(start=date(2025, 1, 6), end=date(2025, 1, 6), employee_id=2)

    assert [row["employee_id"] for row in report.rows] == [2]


def test_get_history_defaults_to_last_week(services, at_jakarta):
    svc = services.attendance_service
    svc.check_in(1, **OFFICE, now=at_jakarta(2025, 1, 6, 9, 0))

    report = svc.get_history(now=at_jakarta(2025, 1, 12, 12, 0))
    older = svc.get_history(now=at_jakarta(2025, 1, 13, 12, 0))

    assert report.summary["total"] == 1
    assert older.summary["total"] == 0


def test_get_history_rejects_inverted_range(services):
    with pytest.raises(ValidationError):
        services.attendance_service.get_history(start=date(2025, 1, 8), end=date(2025, 1, 6))
