from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required
from ..common.datetime_utils import now_local
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    profiles = container.profile_service

    @app.route("/eltern", endpoint="parent_area")
    @role_required(Role.PARENT)
    def parent_area(auth):
        return render_template(
            "portal/parent.html",
            auth=auth,
            profile=profiles.parent_profile(auth.user_id),
            children=profiles.children_of(auth.user_id),
        )

    @app.route("/mitarbeiter", endpoint="employee_area")
    @role_required(Role.EMPLOYEE)
    def employee_area(auth):
        profile = profiles.employee_profile(auth.user_id)
        teacher = None
        entries = []
        if profile and profile.teacher_id:
            teacher = container.teachers_repo.get_by_id(profile.teacher_id)
            _, _, week = container.schedule_service.week(now_local().date())
            entries = [e for e in week if e.teacher_id == profile.teacher_id]

        return render_template("portal/employee.html", auth=auth, profile=profile, teacher=teacher, entries=entries)
