from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import to_iso
from ..container import Container


def register(app: Flask, container: Container) -> None:
    center = container.notifications

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications")
    def notifications():
        items = [
            {
                "id": n.notification_id,
                "level": n.level.value,
                "message": n.message,
                "timestamp": to_iso(n.timestamp),
            }
            for n in center.pending()
        ]
        return jsonify({"success": True, "notifications": items})

    @app.route("/api/notifications/<notification_id>", methods=["DELETE"], endpoint="dismiss_notification")
    def dismiss_notification(notification_id: str):
        if not center.dismiss(notification_id):
            return jsonify({"success": False, "message": "Notification not found"}), 404
        return jsonify({"success": True})
