from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.forms import run_action
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    lifecycle = container.lifecycle

    def update_role(form) -> str:
        user = lifecycle.set_role(form.get("id"), form.get("role"))
        return f"Rolle von {user.name} geändert"

    def delete(form) -> str:
        lifecycle.delete_user(form.get("id"))
        return "Benutzer gelöscht"

    actions = {"updateRole": update_role, "delete": delete}

    @app.route("/admin/benutzer", endpoint="admin_users")
    @role_required(Role.ADMIN)
    def admin_users(auth):
        return render_template(
            "admin/users.html",
            auth=auth,
            users=container.profile_service.list_users(),
            roles=list(Role),
            active_page="admin_users",
        )

    @app.route("/admin/benutzer/<action>", methods=["POST"], endpoint="admin_users_action")
    @role_required(Role.ADMIN)
    def admin_users_action(action: str, auth):
        return run_action(actions, action, back_to="admin_users")
