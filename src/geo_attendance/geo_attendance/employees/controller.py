from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


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

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        def list_all():
            employees = container.employee_service.list_all(
                include_inactive=request.args.get("show_inactive") == "true",
                email=request.args.get("email"),
            )
            return jsonify({"success": True, "data": [e.to_dict() for e in employees]})

        return _handle(list_all, failure="Gagal mengambil data karyawan")

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def employees_create():
        body = request.get_json(silent=True) or {}

        def create():
            employee = container.employee_service.create(
                employee_code=body.get("employee_code"),
                full_name=body.get("full_name"),
                email=body.get("email"),
                phone=body.get("phone"),
                department=body.get("department"),
                position=body.get("position"),
                hire_date=body.get("hire_date"),
            )
            return jsonify({"success": True, "data": employee.to_dict()}), 201

        return _handle(create, failure="Gagal menambah karyawan")

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: int):
        return _handle(
            lambda: jsonify({"success": True, "data": container.employee_service.get(employee_id).to_dict()}),
            failure="Gagal mengambil data karyawan",
        )

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    def employees_update(employee_id: int):
        body = request.get_json(silent=True) or {}
        return _handle(
            lambda: jsonify({"success": True, "data": container.employee_service.update(employee_id, body).to_dict()}),
            failure="Gagal memperbarui karyawan",
        )

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="employees_toggle")
    def employees_toggle(employee_id: int):
        action = (request.get_json(silent=True) or {}).get("action")

        def toggle():
            if action not in ("activate", "deactivate"):
                raise ValidationError('action harus "activate" atau "deactivate"')
            employee = container.employee_service.set_active(employee_id, is_active=action == "activate")
            message = "Karyawan diaktifkan" if employee.is_active else "Karyawan dinonaktifkan"
            return jsonify({"success": True, "message": message, "data": employee.to_dict()})

        return _handle(toggle, failure="Gagal mengubah status karyawan")

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def employees_delete(employee_id: int):
        def delete():
            employee = container.employee_service.delete(employee_id)
            return jsonify({"success": True, "message": "Karyawan dihapus permanen", "data": employee.to_dict()})

        return _handle(delete, failure="Gagal menghapus karyawan")
