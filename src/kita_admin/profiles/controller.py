from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.forms import run_action
from ..container import Container
from ..core.enums import RelationKind, Role


def register(app: Flask, container: Container) -> None:
    profiles = container.profile_service
    lifecycle = container.lifecycle

    # /admin/eltern

    def update_parent(form) -> str:
        profiles.update_parent_profile(form.get("userId"), phone=form.get("telefon"), address=form.get("adresse"))
        return "Profil gespeichert"

    def link_child(form) -> str:
        lifecycle.link_child_to_parent(form.get("userId"), form.get("kindId"), form.get("beziehung"))
        return "Kind verknüpft"

    def unlink_child(form) -> str:
        profiles.unlink_child(form.get("linkId"))
        return "Verknüpfung entfernt"

    def update_link(form) -> str:
        profiles.update_link(form.get("linkId"), form.get("beziehung"))
        return "Beziehung gespeichert"

    parent_actions = {
        "updateProfile": update_parent,
        "linkChild": link_child,
        "unlinkChild": unlink_child,
        "updateLink": update_link,
    }

    @app.route("/admin/eltern", endpoint="admin_parents")
    @role_required(Role.ADMIN)
    def admin_parents(auth):
        return render_template(
            "admin/parents.html",
            auth=auth,
            parents=profiles.list_parents(),
            children=container.child_service.list_all(),
            relations=list(RelationKind),
            active_page="admin_parents",
        )

    @app.route("/admin/eltern/<action>", methods=["POST"], endpoint="admin_parents_action")
    @role_required(Role.ADMIN)
    def admin_parents_action(action: str, auth):
        return run_action(parent_actions, action, back_to="admin_parents")

    # /admin/mitarbeiter

    def update_employee(form) -> str:
        profiles.update_employee_profile(form.get("userId"), position=form.get("position"))
        return "Profil gespeichert"

    def link_teacher(form) -> str:
        lifecycle.link_teacher_to_employee(form.get("userId"), form.get("erzieherId"))
        return "Erzieher/in verknüpft"

    def unlink_teacher(form) -> str:
        profiles.unlink_teacher(form.get("userId"))
        return "Verknüpfung entfernt"

    employee_actions = {
        "updateProfile": update_employee,
        "linkErzieher": link_teacher,
        "unlinkErzieher": unlink_teacher,
    }

    @app.route("/admin/mitarbeiter", endpoint="admin_employees")
    @role_required(Role.ADMIN)
    def admin_employees(auth):
        linked = profiles.linked_teacher_ids()
        return render_template(
            "admin/employees.html",
            auth=auth,
            employees=profiles.list_employees(),
            teachers=container.teacher_service.list_all(),
            linked_teacher_ids=linked,
            active_page="admin_employees",
        )

    @app.route("/admin/mitarbeiter/<action>", methods=["POST"], endpoint="admin_employees_action")
    @role_required(Role.ADMIN)
    def admin_employees_action(action: str, auth):
        return run_action(employee_actions, action, back_to="admin_employees")
