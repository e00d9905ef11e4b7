from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceClassifier
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.cache import TTLCache
from .core.constants import DEFAULT_CACHE_TTL_SECONDS, DEFAULT_GPS_RADIUS_METERS, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .leave_requests.mysql_leave_request_repository import MySQLLeaveRequestRepository
from .leave_requests.service import LeaveRequestService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.service import LocationService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    schedules_repo: MySQLScheduleRepository
    locations_repo: MySQLLocationRepository
    settings_repo: MySQLSettingsRepository
    holidays_repo: MySQLHolidayRepository
    leave_requests_repo: MySQLLeaveRequestRepository

    schedule_service: ScheduleService
    settings_service: SettingsService
    location_service: LocationService
    holiday_service: HolidayService
    employee_service: EmployeeService
    leave_request_service: LeaveRequestService
    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    tz_name: str = DEFAULT_TIMEZONE,
    cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
    default_gps_radius: int = DEFAULT_GPS_RADIUS_METERS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)
    locations_repo = MySQLLocationRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    leave_requests_repo = MySQLLeaveRequestRepository(conn)

    schedule_service = ScheduleService(schedules_repo, cache=TTLCache(cache_ttl))
    settings_service = SettingsService(
        settings_repo,
        cache=TTLCache(cache_ttl),
        default_gps_radius=default_gps_radius,
    )
    location_service = LocationService(locations_repo, settings_service, cache=TTLCache(cache_ttl))
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
        classifier=AttendanceClassifier(tz_name=tz_name),
        tz_name=tz_name,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        locations_repo=locations_repo,
        settings_repo=settings_repo,
        holidays_repo=holidays_repo,
        leave_requests_repo=leave_requests_repo,
        schedule_service=schedule_service,
        settings_service=settings_service,
        location_service=location_service,
        holiday_service=holiday_service,
        employee_service=employee_service,
        leave_request_service=leave_request_service,
        attendance_service=attendance_service,
    )
