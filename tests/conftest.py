from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest
import pytz

from src.geo_attendance.geo_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from src.geo_attendance.geo_attendance.attendance.service import AttendanceService
from src.geo_attendance.geo_attendance.common.cache import TTLCache
from src.geo_attendance.geo_attendance.core.enums import AttendanceStatus, HolidayType, LeaveStatus
from src.geo_attendance.geo_attendance.employees.model import Employee
from src.geo_attendance.geo_attendance.employees.service import EmployeeService
from src.geo_attendance.geo_attendance.holidays.model import Holiday
from src.geo_attendance.geo_attendance.holidays.service import HolidayService
from src.geo_attendance.geo_attendance.leave_requests.model import LeaveRequest, LeaveRequestRow
from src.geo_attendance.geo_attendance.leave_requests.service import LeaveRequestService
from src.geo_attendance.geo_attendance.locations.model import OfficeLocation
from src.geo_attendance.geo_attendance.locations.service import LocationService
from src.geo_attendance.geo_attendance.schedules.model import WorkSchedule
from src.geo_attendance.geo_attendance.schedules.service import ScheduleService
from src.geo_attendance.geo_attendance.settings.model import SystemSetting
from src.geo_attendance.geo_attendance.settings.service import SettingsService

JAKARTA = pytz.timezone("Asia/Jakarta")

OFFICE_LAT = -6.2088
OFFICE_LON = 106.8456


def jakarta(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    """Aware UTC datetime for a Jakarta wall-clock time."""
    return JAKARTA.localize(datetime(year, month, day, hour, minute)).astimezone(pytz.utc)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class InMemorySchedules:
    items: dict[int, WorkSchedule] = field(default_factory=dict)
    list_calls: int = 0

    def list_all(self):
        self.list_calls += 1
        return sorted(self.items.values(), key=lambda s: s.day_of_week)

    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        return self.items.get(schedule_id)

    def update(self, schedule: WorkSchedule) -> bool:
        self.items[schedule.schedule_id] = schedule
        return True


class InMemoryLocations:
    def __init__(self, *locations: OfficeLocation):
        self.items: dict[int, OfficeLocation] = {loc.location_id: loc for loc in locations}
        self._id = max(self.items, default=0)

    def list_all(self):
        return sorted(self.items.values(), key=lambda loc: loc.location_id, reverse=True)

    def get_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        return self.items.get(location_id)

    def create(self, *, name, latitude, longitude, radius, is_active, address=None) -> int:
        self._id += 1
        self.items[self._id] = OfficeLocation(
            location_id=self._id,
            name=name,
            latitude=latitude,
            longitude=longitude,
            radius=radius,
            is_active=is_active,
            address=address,
        )
        return self._id

    def update(self, location: OfficeLocation) -> bool:
        self.items[location.location_id] = location
        return True

    def deactivate_all_except(self, location_id: int) -> int:
        changed = 0
        for loc_id, loc in list(self.items.items()):
            if loc_id != location_id and loc.is_active:
                self.items[loc_id] = replace(loc, is_active=False)
                changed += 1
        return changed

    def delete(self, location_id: int) -> bool:
        return self.items.pop(location_id, None) is not None


class InMemorySettings:
    def __init__(self, **values: str):
        self.values = dict(values)

    def list_all(self):
        return [SystemSetting(setting_key=k, setting_value=v) for k, v in sorted(self.values.items())]

    def get(self, key: str) -> Optional[SystemSetting]:
        if key not in self.values:
            return None
        return SystemSetting(setting_key=key, setting_value=self.values[key])

    def set_value(self, key: str, value: str) -> None:
        self.values[key] = value


class InMemoryHolidays:
    def __init__(self, *holidays: Holiday):
        self.items: dict[int, Holiday] = {h.holiday_id: h for h in holidays}
        self._id = max(self.items, default=0)

    def get_active_on(self, day: date) -> Optional[Holiday]:
        return next((h for h in self.items.values() if h.holiday_date == day and h.is_active), None)

    def list_active(self, *, year=None):
        items = [h for h in self.items.values() if h.is_active and (year is None or h.holiday_date.year == year)]
        return sorted(items, key=lambda h: h.holiday_date)

    def create(self, *, name, holiday_date, holiday_type, description=None) -> int:
        self._id += 1
        self.items[self._id] = Holiday(
            holiday_id=self._id,
            name=name,
            holiday_date=holiday_date,
            holiday_type=holiday_type,
            description=description,
        )
        return self._id

    def delete(self, holiday_id: int) -> bool:
        return self.items.pop(holiday_id, None) is not None


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return next((e for e in self.employees.values() if e.employee_code == employee_code), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self.employees.values() if e.email == email), None)

    def list_all(self, *, include_inactive=False, email=None):
        items = [
            e
            for e in self.employees.values()
            if (include_inactive or e.is_active) and (email is None or e.email == email)
        ]
        return sorted(items, key=lambda e: e.employee_id, reverse=True)

    def create(self, *, employee_code, full_name, email, phone=None, department=None, position=None, hire_date=None) -> int:
        employee_id = max(self.employees, default=0) + 1
        self.employees[employee_id] = Employee(
            employee_id=employee_id,
            employee_code=employee_code,
            full_name=full_name,
            email=email,
            phone=phone,
            department=department,
            position=position,
            hire_date=hire_date,
        )
        return employee_id

    def update(self, employee: Employee) -> bool:
        self.employees[employee.employee_id] = employee
        return True

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        self.employees[employee_id] = replace(self.employees[employee_id], is_active=is_active)
        return True

    def delete(self, employee_id: int) -> bool:
        return self.employees.pop(employee_id, None) is not None


class InMemoryLeaveRequests:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.items: dict[int, LeaveRequest] = {}

    def create(self, *, employee_id, leave_type, start_date, end_date, days, reason, attachment_url=None) -> int:
        request_id = max(self.items, default=0) + 1
        self.items[request_id] = LeaveRequest(
            request_id=request_id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
            status=LeaveStatus.PENDING,
            attachment_url=attachment_url,
        )
        return request_id

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self.items.get(request_id)

    def list_rows(self, *, status=None, employee_id=None, on_date=None, limit=200):
        rows = []
        for req in sorted(self.items.values(), key=lambda r: r.request_id, reverse=True):
            if status is not None and req.status != status:
                continue
            if employee_id is not None and req.employee_id != employee_id:
                continue
            if on_date is not None and not req.start_date <= on_date <= req.end_date:
                continue
            emp = self._employees.get_by_id(req.employee_id)
            rows.append(
                LeaveRequestRow(
                    request=req, employee_code=emp.employee_code, full_name=emp.full_name, department=emp.department
                )
            )
        return rows[:limit]

    def decide(self, *, request_id, status, reviewed_by, admin_notes=None) -> bool:
        req = self.items.get(request_id)
        if req is None or req.status != LeaveStatus.PENDING:
            return False
        self.items[request_id] = replace(
            req,
            status=status,
            reviewed_by=reviewed_by,
            admin_notes=admin_notes,
            reviewed_at=datetime(2025, 1, 6, 3, 0),
        )
        return True


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def _newest_first(self, records):
        return sorted(records, key=lambda r: r.check_in_time, reverse=True)

    def list_open_between(self, employee_id: int, start: datetime, end: datetime):
        return self._newest_first(
            r
            for r in self.records.values()
            if r.employee_id == employee_id and start <= r.check_in_time < end and r.check_out_time is None
        )

    def list_between(self, start: datetime, end: datetime, *, employee_id=None):
        rows = []
        for r in self._newest_first(self.records.values()):
            if not start <= r.check_in_time < end:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            emp = self._employees.get_by_id(r.employee_id)
            rows.append(AttendanceReportRow(record=r, employee_code=emp.employee_code, full_name=emp.full_name))
        return rows

    def add(self, record: AttendanceRecord) -> None:
        self.records[record.attendance_id] = record
        self._id = max(self._id, record.attendance_id)

    def create_checkin(
        self,
        *,
        employee_id,
        check_in_time,
        latitude,
        longitude,
        status: AttendanceStatus,
        notes=None,
        face_match_score=None,
        office_location_id=None,
    ) -> int:
        self._id += 1
        self.records[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            check_in_time=check_in_time,
            status=status.value,
            notes=notes,
            face_match_score=face_match_score,
            check_in_latitude=latitude,
            check_in_longitude=longitude,
            office_location_id=office_location_id,
        )
        return self._id

    def update_checkout(self, *, attendance_id, check_out_time, latitude, longitude, face_match_score=None) -> bool:
        rec = self.records.get(attendance_id)
        if rec is None or rec.check_out_time is not None:
            return False
        self.records[attendance_id] = replace(
            rec,
            check_out_time=check_out_time,
            check_out_latitude=latitude,
            check_out_longitude=longitude,
            face_match_score=face_match_score if face_match_score is not None else rec.face_match_score,
        )
        return True


@pytest.fixture
def make_schedule():
    def _make(day_of_week: int = 1, **overrides) -> WorkSchedule:
        values = dict(
            schedule_id=day_of_week + 1,
            day_of_week=day_of_week,
            day_name=["Minggu", "Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu"][day_of_week],
            start_time="09:00:00",
            end_time="17:00:00",
        )
        values.update(overrides)
        return WorkSchedule(**values)

    return _make


@pytest.fixture
def week_schedules(make_schedule):
    """Mon-Fri 09:00, on time until 09:15, tolerance until 09:30; weekend off."""
    working = [
        make_schedule(
            dow,
            on_time_end_time="09:15:00",
            tolerance_start_time="09:15:00",
            tolerance_end_time="09:30:00",
            late_tolerance_minutes=15,
        )
        for dow in range(1, 6)
    ]
    saturday = make_schedule(6, end_time="13:00:00", is_active=False)
    sunday = make_schedule(0, start_time="00:00:00", end_time="00:00:00", is_active=False)
    return [sunday, *working, saturday]


@pytest.fixture
def head_office() -> OfficeLocation:
    return OfficeLocation(location_id=1, name="Kantor Pusat", latitude=OFFICE_LAT, longitude=OFFICE_LON, radius=100)


@dataclass
class Services:
    schedules_repo: InMemorySchedules
    locations_repo: InMemoryLocations
    settings_repo: InMemorySettings
    holidays_repo: InMemoryHolidays
    employees_repo: InMemoryEmployees
    attendance_repo: InMemoryAttendance
    leave_requests_repo: InMemoryLeaveRequests
    schedule_service: ScheduleService
    settings_service: SettingsService
    location_service: LocationService
    holiday_service: HolidayService
    employee_service: EmployeeService
    leave_request_service: LeaveRequestService
    attendance_service: AttendanceService


@pytest.fixture
def services(week_schedules, head_office) -> Services:
    schedules_repo = InMemorySchedules({s.schedule_id: s for s in week_schedules})
    locations_repo = InMemoryLocations(head_office)
    settings_repo = InMemorySettings(gps_accuracy_radius="3000", face_recognition_threshold="80")
    holidays_repo = InMemoryHolidays(
        Holiday(holiday_id=1, name="Hari Kemerdekaan RI", holiday_date=date(2025, 8, 17), holiday_type=HolidayType.NATIONAL),
        Holiday(holiday_id=2, name="Cuti Bersama", holiday_date=date(2025, 1, 7), holiday_type=HolidayType.COMPANY),
    )
    employees_repo = InMemoryEmployees(
        {
            1: Employee(employee_id=1, employee_code="EMP001", full_name="Budi Santoso", email="budi@example.com"),
            2: Employee(employee_id=2, employee_code="EMP002", full_name="Siti Rahmawati", email="siti@example.com"),
            3: Employee(employee_id=3, employee_code="EMP003", full_name="Nonaktif", is_active=False),
        }
    )
    attendance_repo = InMemoryAttendance(employees_repo)
    leave_requests_repo = InMemoryLeaveRequests(employees_repo)

    schedule_service = ScheduleService(schedules_repo, cache=TTLCache(0))
    settings_service = SettingsService(settings_repo, cache=TTLCache(0))
    location_service = LocationService(locations_repo, settings_service, cache=TTLCache(0))
    holiday_service = HolidayService(holidays_repo)
    employee_service = EmployeeService(employees_repo)
    leave_request_service = LeaveRequestService(leave_requests_repo, employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        schedule_service,
        location_service,
        holiday_service,
        settings_service,
    )
    return Services(
        schedules_repo=schedules_repo,
        locations_repo=locations_repo,
        settings_repo=settings_repo,
        holidays_repo=holidays_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_requests_repo=leave_requests_repo,
        schedule_service=schedule_service,
        settings_service=settings_service,
        location_service=location_service,
        holiday_service=holiday_service,
        employee_service=employee_service,
        leave_request_service=leave_request_service,
        attendance_service=attendance_service,
    )


@pytest.fixture
def at_jakarta():
    return jakarta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)
