from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, g, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.guards import admin_required, login_required
from ..common.responses import error_response, internal_error, ok
from ..container import Container
from ..core.exceptions import DomainError
from .client_session import ClientSession
from .permissions import permissions_for

logger = logging.getLogger(__name__)

SESSION_ENDED_MESSAGE = "Session Ended: your account was logged in on another device. Please log in again."

# Paths that must keep working while the stored session is being replaced.
_SESSION_EXEMPT_PATHS = {"/api/auth/login", "/api/auth/logout"}


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def _user_dict(user) -> dict:
    return {
        "id": user.user_id,
        "username": user.username,
        "name": user.display_name,
        "department": user.department.value,
        "role": user.role.value,
        "status": user.status.value,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    def client_session() -> ClientSession:
        return ClientSession(session, check_interval=int(app.config.get("SESSION_CHECK_INTERVAL", 10)))

    def session_ended():
        return jsonify({"success": False, "session_ended": True, "message": SESSION_ENDED_MESSAGE}), 401

    @app.before_request
    def load_current_user():
        g.current_user = None
        g.session_token = None

        cs = client_session()
        state = cs.load()
        if state is None:
            return None

        now = now_local()
        if cs.needs_check(state, now):
            try:
                valid = container.auth_service.validate_session(state.user.user_id, state.token)
            except DomainError:
                # Storage hiccup: keep the local session, re-check on the next request.
                logger.warning("session check skipped for user %s", state.user.user_id)
                valid = True
            if not valid:
                logger.info("session for user %s replaced elsewhere; ending it", state.user.user_id)
                cs.clear()
                if request.path in _SESSION_EXEMPT_PATHS:
                    return None
                return session_ended()
            cs.mark_checked(now)

        g.current_user = state.user
        g.session_token = state.token
        return None

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        try:
            s = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("logging in")

        client_session().store(s)
        return ok(
            user=s.user.to_dict(),
            token=s.token,
            permissions=permissions_for(s.user.role),
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        user = g.get("current_user")
        if user is not None:
            try:
                container.auth_service.logout(user.user_id)
            except DomainError as e:
                logger.warning("logout for user %s not persisted: %s", user.user_id, e)
        client_session().clear()
        return ok(message="Logged out")

    @app.route("/api/session/check", methods=["GET"], endpoint="session_check")
    def session_check():
        """Polled by the browser; always asks the server, ignoring the throttle."""

        cs = client_session()
        state = cs.load()
        if state is None:
            return jsonify({"success": False, "valid": False, "message": "Not logged in"}), 401
        try:
            valid = container.auth_service.validate_session(state.user.user_id, state.token)
        except DomainError as e:
            return error_response(e)
        if not valid:
            cs.clear()
            return session_ended()
        cs.mark_checked(now_local())
        return ok(valid=True)

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = g.current_user
        return ok(user=user.to_dict(), permissions=permissions_for(user.role))

    @app.route("/api/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = _payload()
        try:
            container.auth_service.change_password(
                g.current_user.user_id,
                current_password=data.get("current_password", ""),
                new_password=data.get("new_password", ""),
                confirm_password=data.get("confirm_password", ""),
            )
            return ok(message="Password updated successfully")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("changing password")

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        try:
            users = container.user_service.list_users()
            stats = container.user_service.stats()
        except DomainError as e:
            return error_response(e)
        return ok(users=[_user_dict(u) for u in users], stats=asdict(stats))

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = _payload()
        try:
            user_id = container.user_service.create_account(
                current_role=g.current_user.role,
                display_name=data.get("name", ""),
                username=data.get("username", ""),
                password=data.get("password", ""),
                department=data.get("department", "logistics_operations"),
                role=data.get("role", "committee"),
            )
            return ok(id=user_id, message="User created"), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("creating user")

    @app.route("/api/admin/users/<int:user_id>/toggle-status", methods=["POST"], endpoint="toggle_user_status")
    @admin_required
    def toggle_user_status(user_id: int):
        try:
            status = container.user_service.toggle_status(
                current_role=g.current_user.role,
                current_user_id=g.current_user.user_id,
                user_id=user_id,
            )
            return ok(status=status.value)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("updating user status")

    @app.route("/api/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        try:
            container.user_service.delete_user(
                current_role=g.current_user.role,
                current_user_id=g.current_user.user_id,
                user_id=user_id,
            )
            return ok(message="User deleted")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("deleting user")
