from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest, LeaveRequestRow


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
        attachment_url: Optional[str] = None,
    ) -> int:
        """Insert a pending request."""

        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_rows(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        on_date: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequestRow]:
        """Newest first; ``on_date`` keeps requests whose range covers that day."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewed_by: str,
        admin_notes: Optional[str] = None,
    ) -> bool:
        """Only a pending request can be decided; False otherwise."""

        raise NotImplementedError
