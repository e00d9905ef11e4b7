from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    def holidays_list():
        year_s = request.args.get("year")
        year = int(year_s) if year_s and year_s.isdigit() else None
        data = [h.to_dict() for h in container.holiday_service.list_active(year=year)]
        return jsonify({"success": True, "data": data})

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_create")
    def holidays_create():
        body = request.get_json(silent=True) or {}
        try:
            holiday_id = container.holiday_service.create(
                name=body.get("name"),
                holiday_date=body.get("date"),
                holiday_type=body.get("type"),
                description=body.get("description"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception:
            logger.exception("Failed to create holiday")
            return jsonify({"success": False, "error": "Gagal menambah hari libur"}), 500

        return jsonify({"success": True, "data": {"id": holiday_id}}), 201

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    def holidays_delete(holiday_id: int):
        try:
            container.holiday_service.delete(holiday_id)
        except NotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except Exception:
            logger.exception("Failed to delete holiday %s", holiday_id)
            return jsonify({"success": False, "error": "Gagal menghapus hari libur"}), 500

        return jsonify({"success": True, "message": "Holiday deleted successfully"})
