from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/work-schedules", methods=["GET"], endpoint="work_schedules_list")
    def work_schedules_list():
        force = request.args.get("refresh") == "1"
        data = [s.to_dict() for s in container.schedule_service.list_all(force_refresh=force)]
        return jsonify({"success": True, "data": data})

    @app.route("/api/work-schedules", methods=["PUT"], endpoint="work_schedules_update")
    def work_schedules_update():
        body = request.get_json(silent=True) or {}
        schedule_id = body.pop("id", None)
        if not schedule_id:
            return jsonify({"success": False, "error": "id is required"}), 400

        try:
            schedule = container.schedule_service.update(int(schedule_id), body)
        except NotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception:
            logger.exception("Failed to update work schedule %s", schedule_id)
            return jsonify({"success": False, "error": "Gagal memperbarui jadwal kerja"}), 500

        return jsonify({"success": True, "data": schedule.to_dict(), "message": "Work schedule updated successfully"})
