from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest, LeaveRequestRow
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


def _parse_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid (YYYY-MM-DD)")


class LeaveRequestService:
    """Use case: employees submit leave, admins approve or reject it."""

    def __init__(self, requests: LeaveRequestRepository, employees: EmployeeRepository):
        self._requests = requests
        self._employees = employees

    def list_rows(
        self,
        *,
        status: Optional[str] = None,
        employee_id: Optional[int] = None,
        on_date: Optional[str] = None,
    ) -> Sequence[LeaveRequestRow]:
        # "all" (or nothing) means no status filter.
        wanted: Optional[LeaveStatus] = None
        if status and status != "all":
            try:
                wanted = LeaveStatus(status)
            except ValueError:
                raise ValidationError(f"Status pengajuan tidak dikenal: {status}")

        return self._requests.list_rows(
            status=wanted,
            employee_id=int(employee_id) if employee_id is not None else None,
            on_date=_parse_date(on_date, "Tanggal") if on_date else None,
        )

    def get(self, request_id: int) -> LeaveRequest:
        req = self._requests.get(int(request_id))
        if not req:
            raise NotFoundError("Pengajuan cuti tidak ditemukan")
        return req

    def submit(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: Any,
        end_date: Any,
        reason: str,
        attachment_url: Optional[str] = None,
    ) -> LeaveRequest:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Karyawan tidak ditemukan atau tidak aktif")

        try:
            kind = LeaveType(leave_type)
        except ValueError:
            raise ValidationError("Jenis cuti harus salah satu dari: sick, annual, personal, emergency")

        start = _parse_date(start_date, "Tanggal mulai")
        end = _parse_date(end_date, "Tanggal selesai")
        if end < start:
            raise ValidationError("Tanggal selesai tidak boleh sebelum tanggal mulai")
        reason = require_non_empty(reason, "Alasan")

        request_id = self._requests.create(
            employee_id=employee.employee_id,
            leave_type=kind,
            start_date=start,
            end_date=end,
            days=(end - start).days + 1,
            reason=reason,
            attachment_url=(attachment_url or "").strip() or None,
        )
        logger.info("Leave request %s submitted by %s (%s to %s)", request_id, employee.employee_code, start, end)
        return self.get(request_id)

    def review(
        self,
        request_id: int,
        *,
        status: str,
        reviewed_by: str,
        admin_notes: Optional[str] = None,
    ) -> LeaveRequest:
        if status not in (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value):
            raise ValidationError('Status harus "approved" atau "rejected"')
        reviewer = require_non_empty(reviewed_by, "Peninjau")

        current = self.get(request_id)
        if current.status != LeaveStatus.PENDING:
            raise ValidationError("Pengajuan cuti sudah diproses")

        decided = self._requests.decide(
            request_id=current.request_id,
            status=LeaveStatus(status),
            reviewed_by=reviewer,
            admin_notes=(admin_notes or "").strip() or None,
        )
        if not decided:
            raise ValidationError("Pengajuan cuti sudah diproses")

        logger.info("Leave request %s %s by %s", current.request_id, status, reviewer)
        return self.get(current.request_id)
