from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.forms import run_action
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    children = container.child_service

    def create(form) -> str:
        children.create(
            first_name=form.get("vorname"),
            last_name=form.get("nachname"),
            birthdate=form.get("geburtstag"),
            group_id=form.get("gruppeId"),
            photo_path=form.get("fotoPath"),
        )
        return "Kind angelegt"

    def edit(form) -> str:
        children.edit(
            form.get("id"),
            first_name=form.get("vorname"),
            last_name=form.get("nachname"),
            birthdate=form.get("geburtstag"),
            group_id=form.get("gruppeId"),
            photo_path=form.get("fotoPath"),
        )
        return "Kind gespeichert"

    def delete(form) -> str:
        children.delete(form.get("id"))
        return "Kind gelöscht"

    actions = {"create": create, "edit": edit, "delete": delete}

    @app.route("/admin/kinder", endpoint="admin_children")
    @role_required(Role.ADMIN)
    def admin_children(auth):
        return render_template(
            "admin/children.html",
            auth=auth,
            children=children.list_all(),
            groups=container.group_service.list_all(),
            active_page="admin_children",
        )

    @app.route("/admin/kinder/<action>", methods=["POST"], endpoint="admin_children_action")
    @role_required(Role.ADMIN)
    def admin_children_action(action: str, auth):
        return run_action(actions, action, back_to="admin_children")
