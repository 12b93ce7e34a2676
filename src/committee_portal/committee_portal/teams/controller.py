from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g, request

from ..common.guards import page_permission
from ..common.responses import error_response, internal_error, ok
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..users.permissions import Page


def _team_dict(team) -> dict:
    return {
        "id": team.group.group_id,
        "name": team.group.name,
        "size": team.size,
        "is_full": team.is_full,
        "participants": [
            {
                "id": p.participant_id,
                "name": p.name,
                "registered_at": p.registered_at.isoformat() if p.registered_at else None,
            }
            for p in team.participants
        ],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teams", methods=["GET"], endpoint="list_teams")
    @page_permission(Page.TEAMS)
    def list_teams():
        try:
            teams = container.team_allocator.list_teams()
            stats = container.team_allocator.team_stats()
        except DomainError as e:
            return error_response(e)
        return ok(teams=[_team_dict(t) for t in teams], stats=asdict(stats))

    @app.route("/api/teams", methods=["POST"], endpoint="add_team")
    @page_permission(Page.TEAMS, edit=True)
    def add_team():
        try:
            group = container.team_allocator.add_group()
            return ok(id=group.group_id, name=group.name), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("adding team")

    @app.route("/api/teams/<int:group_id>", methods=["DELETE"], endpoint="delete_team")
    @page_permission(Page.TEAMS, edit=True)
    def delete_team(group_id: int):
        try:
            removed = container.team_allocator.delete_group(group_id)
            return ok(removed_participants=removed, message="Team deleted")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("deleting team")

    @app.route("/api/participants", methods=["POST"], endpoint="register_participant")
    @page_permission(Page.TEAMS, edit=True)
    def register_participant():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            participant, group = container.team_allocator.register_participant(
                data.get("name", ""), registered_by=g.current_user.user_id
            )
            return ok(
                participant={"id": participant.participant_id, "name": participant.name},
                team={"id": group.group_id, "name": group.name},
                message=f"{participant.name} joined {group.name}",
            ), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("registering participant")

    @app.route("/api/participants/<int:participant_id>/move", methods=["POST"], endpoint="move_participant")
    @page_permission(Page.TEAMS, edit=True)
    def move_participant(participant_id: int):
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            from_group_id = int(data["from_group_id"])
            to_group_id = int(data["to_group_id"])
        except (KeyError, TypeError, ValueError):
            return error_response(ValidationError("from_group_id and to_group_id are required"))
        try:
            container.team_allocator.move_participant(participant_id, from_group_id, to_group_id)
            return ok(message="Participant moved")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("moving participant")

    @app.route("/api/participants/<int:participant_id>", methods=["DELETE"], endpoint="delete_participant")
    @page_permission(Page.TEAMS, edit=True)
    def delete_participant(participant_id: int):
        try:
            container.team_allocator.delete_participant(participant_id)
            return ok(message="Participant deleted")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("deleting participant")
