from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.forms import run_action
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    groups = container.group_service

    def create(form) -> str:
        groups.create(name=form.get("name"), color=form.get("farbe"))
        return "Gruppe angelegt"

    def edit(form) -> str:
        groups.edit(form.get("id"), name=form.get("name"), color=form.get("farbe"))
        return "Gruppe gespeichert"

    def delete(form) -> str:
        container.lifecycle.delete_group(form.get("id"))
        return "Gruppe gelöscht"

    actions = {"create": create, "edit": edit, "delete": delete}

    @app.route("/admin/gruppen", endpoint="admin_groups")
    @role_required(Role.ADMIN)
    def admin_groups(auth):
        return render_template("admin/groups.html", auth=auth, groups=groups.list_all(), active_page="admin_groups")

    @app.route("/admin/gruppen/<action>", methods=["POST"], endpoint="admin_groups_action")
    @role_required(Role.ADMIN)
    def admin_groups_action(action: str, auth):
        return run_action(actions, action, back_to="admin_groups")
