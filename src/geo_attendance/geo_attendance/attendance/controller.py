from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import GeofenceError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _employee_id(raw) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError("employee_id wajib diisi")


def register(app: Flask, container: Container) -> None:
    def _handle(action, *, failure: str):
        try:
            return action()
        except GeofenceError as e:
            return jsonify({"success": False, "error": str(e), "details": e.details}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception:
            logger.exception(failure)
            return jsonify({"success": False, "error": failure}), 500

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    def attendance_check_in():
        body = request.get_json(silent=True) or {}

        def check_in():
            result = container.attendance_service.check_in(
                _employee_id(body.get("employee_id")),
                latitude=body.get("latitude"),
                longitude=body.get("longitude"),
                face_match_score=body.get("face_match_score"),
                location_id=body.get("location_id"),
            )
            return jsonify({"success": True, "message": result.message, "data": result.to_dict()})

        return _handle(check_in, failure="Terjadi kesalahan saat check-in")

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    def attendance_check_out():
        body = request.get_json(silent=True) or {}

        def check_out():
            result = container.attendance_service.check_out(
                _employee_id(body.get("employee_id")),
                latitude=body.get("latitude"),
                longitude=body.get("longitude"),
                face_match_score=body.get("face_match_score"),
            )
            return jsonify({"success": True, "message": "Check-out berhasil!", "data": result.to_dict()})

        return _handle(check_out, failure="Terjadi kesalahan saat check-out")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        def today():
            employee_id = request.args.get("employee_id")
            data = container.attendance_service.get_today(_employee_id(employee_id) if employee_id else None)
            return jsonify({"success": True, "data": data})

        return _handle(today, failure="Gagal mengambil data absensi hari ini")

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        def history():
            employee_id = request.args.get("employee_id")
            start_raw = request.args.get("start")
            end_raw = request.args.get("end")
            try:
                start = parse_iso_date(start_raw) if start_raw else None
                end = parse_iso_date(end_raw) if end_raw else None
            except ValueError:
                raise ValidationError("Tanggal tidak valid (YYYY-MM-DD)")
            report = container.attendance_service.get_history(
                start=start,
                end=end,
                employee_id=_employee_id(employee_id) if employee_id else None,
            )
            return jsonify({"success": True, "data": report.rows, "summary": report.summary})

        return _handle(history, failure="Gagal mengambil riwayat absensi")
