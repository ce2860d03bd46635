from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.forms import run_action
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    teachers = container.teacher_service

    def create(form) -> str:
        teachers.create(
            first_name=form.get("vorname"),
            last_name=form.get("nachname"),
            email=form.get("email"),
            photo_path=form.get("fotoPath"),
        )
        return "Erzieher/in angelegt"

    def edit(form) -> str:
        teachers.edit(
            form.get("id"),
            first_name=form.get("vorname"),
            last_name=form.get("nachname"),
            email=form.get("email"),
            photo_path=form.get("fotoPath"),
        )
        return "Erzieher/in gespeichert"

    def delete(form) -> str:
        container.lifecycle.delete_teacher(form.get("id"))
        return "Erzieher/in gelöscht"

    actions = {"create": create, "edit": edit, "delete": delete}

    @app.route("/admin/erzieher", endpoint="admin_teachers")
    @role_required(Role.ADMIN)
    def admin_teachers(auth):
        return render_template(
            "admin/teachers.html", auth=auth, teachers=teachers.list_all(), active_page="admin_teachers"
        )

    @app.route("/admin/erzieher/<action>", methods=["POST"], endpoint="admin_teachers_action")
    @role_required(Role.ADMIN)
    def admin_teachers_action(action: str, auth):
        return run_action(actions, action, back_to="admin_teachers")
