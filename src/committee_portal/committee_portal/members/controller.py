from __future__ import annotations

from flask import Flask, request

from ..common.guards import page_permission
from ..common.responses import error_response, internal_error, ok
from ..container import Container
from ..core.exceptions import DomainError
from ..users.permissions import Page


def _member_dict(member) -> dict:
    return {
        "id": member.member_id,
        "name": member.name,
        "department": member.department.value,
        "department_name": member.department.display_name,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    @page_permission(Page.ATTENDANCE)
    def list_members():
        try:
            members = container.member_service.list_members(department=request.args.get("department") or None)
        except DomainError as e:
            return error_response(e)
        return ok(members=[_member_dict(m) for m in members])

    @app.route("/api/members", methods=["POST"], endpoint="add_member")
    @page_permission(Page.ATTENDANCE, edit=True)
    def add_member():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            member_id = container.member_service.add_member(
                name=data.get("name", ""),
                department=data.get("department", ""),
            )
            return ok(id=member_id, message="Member added"), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("adding member")

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="delete_member")
    @page_permission(Page.ATTENDANCE, edit=True)
    def delete_member(member_id: int):
        try:
            container.member_service.delete_member(member_id)
            return ok(message="Member deleted")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("deleting member")
