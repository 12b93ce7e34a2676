from __future__ import annotations

from functools import wraps

from flask import g, jsonify

from ..users.permissions import Page, can_edit, can_view


def _forbidden(message: str = "You do not have permission to do that"):
    return jsonify({"success": False, "message": message}), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if g.get("current_user") is None:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def page_permission(page: Page, *, edit: bool = False):
    """Require view (or full, when edit=True) permission on a page."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = g.get("current_user")
            if user is None:
                return jsonify({"success": False, "message": "Please log in to continue"}), 401
            allowed = can_edit(user.role, page) if edit else can_view(user.role, page)
            if not allowed:
                return _forbidden()
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(view):
    return page_permission(Page.USER_MANAGEMENT, edit=True)(view)
