from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional

from ..common.datetime_utils import ensure_utc, local_day_bounds, local_minutes, now_utc, to_local, to_utc_naive
from ..common.validators import require_coordinates
from ..core.constants import DEFAULT_HISTORY_DAYS, DEFAULT_TIMEZONE, EARLY_CHECKIN_WINDOW_MINUTES
from ..core.enums import StatusDetail
from ..core.exceptions import GeofenceError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..holidays.service import HolidayService
from ..locations.geofence import GeofenceResult
from ..locations.service import LocationService
from ..schedules.model import WorkSchedule
from ..schedules.service import ScheduleService
from ..settings.service import SettingsService
from .factory import AttendanceClassifier, summarize
from .model import AttendanceReportRow, CheckInDecision, StatusClassification
from .repository import AttendanceRepository
from .strategies.schedule_strategy import decide_checkin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    attendance_id: int
    check_in_time: datetime
    decision: CheckInDecision
    schedule: WorkSchedule
    geofence: GeofenceResult

    @property
    def message(self) -> str:
        if self.decision.status_detail == StatusDetail.LATE:
            return f"Check-in berhasil (Terlambat {self.decision.late_minutes} menit)"
        return "Check-in berhasil!"

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "check_in_time": self.check_in_time.isoformat(),
            "status": self.decision.status.value,
            "status_detail": self.decision.status_detail.value,
            "late_minutes": self.decision.late_minutes,
            "notes": self.decision.notes,
            "work_schedule": f"{self.schedule.start_time[:5]} - {self.schedule.end_time[:5]}",
            "location": self.geofence.details(),
        }


@dataclass(frozen=True)
class CheckOutResult:
    attendance_id: int
    check_in_time: datetime
    check_out_time: datetime
    geofence: GeofenceResult

    @property
    def worked_minutes(self) -> int:
        worked = ensure_utc(self.check_out_time) - ensure_utc(self.check_in_time)
        return max(0, int(worked.total_seconds() // 60))

    def to_dict(self) -> dict:
        minutes = self.worked_minutes
        return {
            "attendance_id": self.attendance_id,
            "check_out_time": self.check_out_time.isoformat(),
            "worked_minutes": minutes,
            "worked_hours": f"{minutes // 60:02d}:{minutes % 60:02d}",
            "location": self.geofence.details(),
        }


@dataclass(frozen=True)
class HistoryReport:
    rows: list[dict]
    summary: dict[str, int]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        schedules: ScheduleService,
        locations: LocationService,
        holidays: HolidayService,
        settings: SettingsService,
        *,
        classifier: Optional[AttendanceClassifier] = None,
        tz_name: str = DEFAULT_TIMEZONE,
        early_window_minutes: int = EARLY_CHECKIN_WINDOW_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._schedules = schedules
        self._locations = locations
        self._holidays = holidays
        self._settings = settings
        self._classifier = classifier or AttendanceClassifier(tz_name=tz_name)
        self._tz_name = tz_name
        self._early_window = int(early_window_minutes)

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Karyawan tidak ditemukan atau tidak aktif")
        return employee

    def _check_face_score(self, score: Any) -> Optional[float]:
        if score is None:
            return None
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= 100:
            raise ValidationError("face_match_score harus antara 0-100")

        threshold = self._settings.face_threshold()
        if score < threshold:
            raise ValidationError(f"Verifikasi wajah gagal (skor {score:g}%, minimal {threshold}%)")
        return float(score)

    def _require_inside_geofence(self, latitude: Any, longitude: Any) -> tuple[float, float, GeofenceResult]:
        lat, lon = require_coordinates(latitude, longitude)
        result = self._locations.validate_position(lat, lon)
        if not result.valid:
            raise GeofenceError(result.error or "Lokasi tidak sesuai", details=result.details())
        return lat, lon, result

    def _resolve_location_id(self, location_id: Any, geofence: GeofenceResult) -> Optional[int]:
        if location_id in (None, ""):
            return geofence.office.location_id if geofence.office else None
        if isinstance(location_id, bool):
            raise ValidationError("location_id tidak valid")
        try:
            return self._locations.get(int(location_id)).location_id
        except (TypeError, ValueError):
            raise ValidationError("location_id tidak valid")

    def check_in(
        self,
        employee_id: int,
        *,
        latitude: Any,
        longitude: Any,
        face_match_score: Any = None,
        location_id: Any = None,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        now = ensure_utc(now or now_utc())
        local_now = to_local(now, self._tz_name)
        today = local_now.date()

        employee = self._require_employee(employee_id)
        score = self._check_face_score(face_match_score)
        lat, lon, geofence = self._require_inside_geofence(latitude, longitude)
        office_location_id = self._resolve_location_id(location_id, geofence)

        holiday = self._holidays.holiday_on(today)
        if holiday:
            raise ValidationError(f"Hari ini adalah hari libur: {holiday.name}")

        schedule = self._schedules.get_any_for_date(today)
        if not schedule:
            raise ValidationError("Jadwal kerja untuk hari ini belum dikonfigurasi")
        if not schedule.is_active:
            raise ValidationError(f"Hari ini ({schedule.day_name}) bukan hari kerja")

        if local_minutes(local_now) - schedule.windows().start_minutes < -self._early_window:
            raise ValidationError(
                f"Terlalu pagi untuk check-in. Rentang jam masuk dimulai pukul {schedule.start_time[:5]}. "
                f"Check-in diizinkan maksimal {self._early_window} menit sebelum jam mulai."
            )

        day_start, day_end = local_day_bounds(today, self._tz_name)
        if self._attendance.list_open_between(employee.employee_id, day_start, day_end):
            raise ValidationError("Anda sudah check-in hari ini")

        decision = decide_checkin(local_now, schedule)
        attendance_id = self._attendance.create_checkin(
            employee_id=employee.employee_id,
            check_in_time=to_utc_naive(now),
            latitude=lat,
            longitude=lon,
            status=decision.status,
            notes=decision.notes,
            face_match_score=score,
            office_location_id=office_location_id,
        )

        logger.info(
            "Employee %s checked in at %s (%s, %.0fm from %s)",
            employee.employee_code,
            local_now.strftime("%Y-%m-%d %H:%M"),
            decision.status_detail.value,
            geofence.distance or 0,
            geofence.office.name if geofence.office else "-",
        )
        return CheckInResult(
            attendance_id=attendance_id,
            check_in_time=now,
            decision=decision,
            schedule=schedule,
            geofence=geofence,
        )

    def check_out(
        self,
        employee_id: int,
        *,
        latitude: Any,
        longitude: Any,
        face_match_score: Any = None,
        now: Optional[datetime] = None,
    ) -> CheckOutResult:
        now = ensure_utc(now or now_utc())
        today = to_local(now, self._tz_name).date()

        employee = self._require_employee(employee_id)
        score = self._check_face_score(face_match_score)
        lat, lon, geofence = self._require_inside_geofence(latitude, longitude)

        day_start, day_end = local_day_bounds(today, self._tz_name)
        open_records = self._attendance.list_open_between(employee.employee_id, day_start, day_end)
        if not open_records:
            raise NotFoundError("Tidak ada data check-in untuk hari ini. Silakan lakukan check-in terlebih dahulu.")
        if len(open_records) > 1:
            logger.warning(
                "Multiple open check-ins for employee %s; using the most recent one", employee.employee_code
            )
        record = open_records[0]

        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=to_utc_naive(now),
            latitude=lat,
            longitude=lon,
            face_match_score=score,
        )
        if not ok:
            raise ValidationError("Anda sudah melakukan check-out hari ini")

        logger.info("Employee %s checked out (attendance %s)", employee.employee_code, record.attendance_id)
        return CheckOutResult(
            attendance_id=record.attendance_id,
            check_in_time=record.check_in_time,
            check_out_time=now,
            geofence=geofence,
        )

    def get_today(self, employee_id: Optional[int] = None, *, now: Optional[datetime] = None) -> list[dict]:
        """Records of the local day with their classification, newest first.

        Without ``employee_id`` every employee's records are returned.
        """
        today = to_local(now or now_utc(), self._tz_name).date()
        day_start, day_end = local_day_bounds(today, self._tz_name)

        rows = self._attendance.list_between(
            day_start,
            day_end,
            employee_id=int(employee_id) if employee_id is not None else None,
        )
        schedules = self._schedules.list_all()
        return [self._to_ui(r, self._classifier.classify(r.record, schedules)) for r in rows]

    def get_history(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> HistoryReport:
        """Classified records for a local-date range (both ends inclusive)."""
        if end is None:
            end = to_local(now or now_utc(), self._tz_name).date()
        if start is None:
            start = end - timedelta(days=DEFAULT_HISTORY_DAYS - 1)
        if start > end:
            raise ValidationError("Tanggal mulai tidak boleh setelah tanggal akhir")

        range_start, _ = local_day_bounds(start, self._tz_name)
        _, range_end = local_day_bounds(end, self._tz_name)
        rows = self._attendance.list_between(range_start, range_end, employee_id=employee_id)

        schedules = self._schedules.list_all()
        classified = [(r, self._classifier.classify(r.record, schedules)) for r in rows]
        return HistoryReport(
            rows=[self._to_ui(r, c) for r, c in classified],
            summary=summarize(c for _, c in classified),
        )

    def _to_ui(self, row: AttendanceReportRow, classification: StatusClassification) -> dict:
        rec = row.record

        def _fmt(value: Optional[datetime]) -> Optional[str]:
            return to_local(value, self._tz_name).strftime("%Y-%m-%d %H:%M:%S") if value else None

        return {
            "id": rec.attendance_id,
            "employee_id": rec.employee_id,
            "employee_code": row.employee_code,
            "full_name": row.full_name,
            "check_in_time": _fmt(rec.check_in_time),
            "check_out_time": _fmt(rec.check_out_time),
            "status": rec.status,
            "notes": rec.notes,
            "face_match_score": rec.face_match_score,
            "office_location_id": rec.office_location_id,
            **classification.to_dict(),
        }
