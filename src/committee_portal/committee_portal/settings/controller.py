from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.guards import admin_required
from ..common.responses import error_response, internal_error, ok
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def maintenance_guard():
        user = g.get("current_user")
        role = user.role if user is not None else None
        if not container.maintenance_service.is_blocked(request.path, role):
            return None
        status = container.maintenance_service.get_status()
        return jsonify({"success": False, "maintenance": True, "message": status.message}), 503

    @app.route("/api/maintenance", methods=["GET"], endpoint="maintenance_status")
    def maintenance_status():
        status = container.maintenance_service.get_status()
        return ok(enabled=status.enabled, message=status.message)

    @app.route("/api/admin/maintenance/toggle", methods=["POST"], endpoint="toggle_maintenance")
    @admin_required
    def toggle_maintenance():
        try:
            status = container.maintenance_service.toggle(
                current_role=g.current_user.role, user_id=g.current_user.user_id
            )
            return ok(enabled=status.enabled, message=status.message)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("toggling maintenance mode")

    @app.route("/api/admin/maintenance/message", methods=["POST"], endpoint="maintenance_message")
    @admin_required
    def maintenance_message():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            status = container.maintenance_service.set_message(
                current_role=g.current_user.role,
                user_id=g.current_user.user_id,
                message=data.get("message", ""),
            )
            return ok(enabled=status.enabled, message=status.message)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("updating maintenance message")
