from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.forms import run_action
from ..container import Container
from ..core.enums import Priority, Role


def register(app: Flask, container: Container) -> None:
    announcements = container.announcement_service

    def _fields(form) -> dict:
        return {
            "title": form.get("titel"),
            "message": form.get("nachricht"),
            "valid_from": form.get("gueltigVon"),
            "valid_to": form.get("gueltigBis"),
            "priority": form.get("prioritaet"),
        }

    def create(form) -> str:
        announcements.create(**_fields(form))
        return "Ankündigung veröffentlicht"

    def edit(form) -> str:
        announcements.edit(form.get("id"), **_fields(form))
        return "Ankündigung gespeichert"

    def delete(form) -> str:
        announcements.delete(form.get("id"))
        return "Ankündigung gelöscht"

    actions = {"create": create, "edit": edit, "delete": delete}

    @app.route("/admin/ankuendigungen", endpoint="admin_announcements")
    @role_required(Role.ADMIN)
    def admin_announcements(auth):
        return render_template(
            "admin/announcements.html",
            auth=auth,
            announcements=announcements.list_all(),
            priorities=list(Priority),
            active_page="admin_announcements",
        )

    @app.route("/admin/ankuendigungen/<action>", methods=["POST"], endpoint="admin_announcements_action")
    @role_required(Role.ADMIN)
    def admin_announcements_action(action: str, auth):
        return run_action(actions, action, back_to="admin_announcements")
