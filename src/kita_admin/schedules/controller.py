from __future__ import annotations

from datetime import timedelta

from flask import Flask, render_template, request

from ..auth.guard import role_required
from ..common.datetime_utils import format_date, now_local, week_days, week_from_param
from ..common.forms import run_action
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    schedules = container.schedule_service

    def create(form) -> str:
        schedules.create(
            teacher_id=form.get("erzieherId"),
            day=form.get("datum"),
            start_time=form.get("startZeit"),
            end_time=form.get("endZeit"),
        )
        return "Dienst eingetragen"

    def edit(form) -> str:
        schedules.edit(form.get("id"), start_time=form.get("startZeit"), end_time=form.get("endZeit"))
        return "Dienst gespeichert"

    def delete(form) -> str:
        schedules.delete(form.get("id"))
        return "Dienst gelöscht"

    actions = {"create": create, "edit": edit, "delete": delete}

    @app.route("/admin/dienstplan", endpoint="admin_schedules")
    @role_required(Role.ADMIN)
    def admin_schedules(auth):
        reference = week_from_param(request.args.get("week"), today=now_local().date())
        start, end, entries = schedules.week(reference)

        by_day: dict[str, list] = {}
        for entry in entries:
            by_day.setdefault(entry.date, []).append(entry)

        return render_template(
            "admin/schedules.html",
            auth=auth,
            start=start,
            end=end,
            days=[format_date(d) for d in week_days(reference, days=7)],
            entries_by_day=by_day,
            teachers=container.teacher_service.list_all(),
            prev_week=format_date(reference - timedelta(days=7)),
            next_week=format_date(reference + timedelta(days=7)),
            active_page="admin_schedules",
        )

    @app.route("/admin/dienstplan/<action>", methods=["POST"], endpoint="admin_schedules_action")
    @role_required(Role.ADMIN)
    def admin_schedules_action(action: str, auth):
        return run_action(actions, action, back_to="admin_schedules", week=request.args.get("week"))
