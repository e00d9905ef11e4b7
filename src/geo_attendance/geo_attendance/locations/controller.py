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

    @app.route("/api/office-locations", methods=["GET"], endpoint="office_locations_list")
    def office_locations_list():
        force = request.args.get("refresh") == "1"
        data = [loc.to_dict() for loc in container.location_service.list_all(force_refresh=force)]
        return jsonify({"success": True, "data": data})

    @app.route("/api/office-locations", methods=["POST"], endpoint="office_locations_create")
    def office_locations_create():
        body = request.get_json(silent=True) or {}

        def create():
            location = container.location_service.create(
                name=body.get("name"),
                latitude=body.get("latitude"),
                longitude=body.get("longitude"),
                radius=body.get("radius", 100),
                address=body.get("address"),
                is_active=bool(body.get("is_active", True)),
            )
            return jsonify({"success": True, "data": location.to_dict()}), 201

        return _handle(create, failure="Gagal menambah lokasi kantor")

    @app.route("/api/office-locations/<int:location_id>", methods=["GET"], endpoint="office_locations_get")
    def office_locations_get(location_id: int):
        return _handle(
            lambda: jsonify({"success": True, "data": container.location_service.get(location_id).to_dict()}),
            failure="Gagal mengambil lokasi kantor",
        )

    @app.route("/api/office-locations/<int:location_id>", methods=["PUT"], endpoint="office_locations_update")
    def office_locations_update(location_id: int):
        body = request.get_json(silent=True) or {}
        return _handle(
            lambda: jsonify({"success": True, "data": container.location_service.update(location_id, body).to_dict()}),
            failure="Gagal memperbarui lokasi kantor",
        )

    @app.route("/api/office-locations/<int:location_id>/activate", methods=["POST"], endpoint="office_locations_activate")
    def office_locations_activate(location_id: int):
        return _handle(
            lambda: jsonify({"success": True, "data": container.location_service.activate(location_id).to_dict()}),
            failure="Gagal mengaktifkan lokasi kantor",
        )

    @app.route("/api/office-locations/<int:location_id>", methods=["DELETE"], endpoint="office_locations_delete")
    def office_locations_delete(location_id: int):
        def delete():
            container.location_service.delete(location_id)
            return jsonify({"success": True, "message": "Location deleted successfully"})

        return _handle(delete, failure="Gagal menghapus lokasi kantor")
