from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/system-settings", methods=["GET"], endpoint="system_settings_get")
    def system_settings_get():
        force = request.args.get("refresh") == "1"
        return jsonify({"success": True, "data": container.settings_service.as_dict(force_refresh=force)})

    @app.route("/api/system-settings", methods=["PUT"], endpoint="system_settings_update")
    def system_settings_update():
        body = request.get_json(silent=True) or {}
        try:
            container.settings_service.update(body)
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception:
            logger.exception("Failed to update system settings")
            return jsonify({"success": False, "error": "Gagal memperbarui pengaturan sistem"}), 500

        return jsonify({"success": True, "message": "System settings updated successfully"})
