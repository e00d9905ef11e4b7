from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _int_or_error(raw, field_name: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} wajib diisi")


def register(app: Flask, container: Container) -> None:
    def _handle(action, *, failure: str):
        try:
            return action()
        except NotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception:
            logger.exception(failure)
            return jsonify({"success": False, "error": failure}), 500

    @app.route("/api/leave-requests", methods=["GET"], endpoint="leave_requests_list")
    def leave_requests_list():
        def list_rows():
            employee_id = request.args.get("employee_id")
            rows = container.leave_request_service.list_rows(
                status=request.args.get("status"),
                employee_id=_int_or_error(employee_id, "employee_id") if employee_id else None,
                on_date=request.args.get("date"),
            )
            return jsonify({"success": True, "data": [r.to_dict() for r in rows]})

        return _handle(list_rows, failure="Gagal mengambil data pengajuan cuti")

    @app.route("/api/leave-requests", methods=["POST"], endpoint="leave_requests_submit")
    def leave_requests_submit():
        body = request.get_json(silent=True) or {}

        def submit():
            leave = container.leave_request_service.submit(
                employee_id=_int_or_error(body.get("employee_id"), "employee_id"),
                leave_type=body.get("leave_type"),
                start_date=body.get("start_date"),
                end_date=body.get("end_date"),
                reason=body.get("reason"),
                attachment_url=body.get("attachment_url"),
            )
            return jsonify({"success": True, "message": "Pengajuan cuti terkirim", "data": leave.to_dict()}), 201

        return _handle(submit, failure="Gagal mengirim pengajuan cuti")

    @app.route("/api/leave-requests", methods=["PUT"], endpoint="leave_requests_review")
    def leave_requests_review():
        body = request.get_json(silent=True) or {}

        def review():
            leave = container.leave_request_service.review(
                _int_or_error(body.get("id"), "id"),
                status=body.get("status"),
                reviewed_by=body.get("reviewed_by"),
                admin_notes=body.get("admin_notes"),
            )
            label = "disetujui" if leave.status == LeaveStatus.APPROVED else "ditolak"
            return jsonify({"success": True, "message": f"Pengajuan cuti {label}", "data": leave.to_dict()})

        return _handle(review, failure="Gagal memproses pengajuan cuti")
