from __future__ import annotations

from datetime import timedelta

from flask import Flask, render_template, request

from ..auth.guard import role_required
from ..common.datetime_utils import format_date, now_local, week_days, week_from_param
from ..common.forms import run_action
from ..container import Container
from ..core.enums import MealType, Role


def register(app: Flask, container: Container) -> None:
    meals = container.meal_service

    def create(form) -> str:
        meals.create(day=form.get("datum"), meal_type=form.get("typ"), description=form.get("beschreibung"))
        return "Mahlzeit eingetragen"

    def edit(form) -> str:
        meals.edit(form.get("id"), description=form.get("beschreibung"))
        return "Mahlzeit gespeichert"

    def delete(form) -> str:
        meals.delete(form.get("id"))
        return "Mahlzeit gelöscht"

    actions = {"create": create, "edit": edit, "delete": delete}

    @app.route("/admin/speiseplan", endpoint="admin_meals")
    @role_required(Role.ADMIN)
    def admin_meals(auth):
        reference = week_from_param(request.args.get("week"), today=now_local().date())
        start, end, week_meals = meals.week(reference)
        slots = {(m.date, m.meal_type): m for m in week_meals}

        return render_template(
            "admin/meals.html",
            auth=auth,
            start=start,
            end=end,
            days=[format_date(d) for d in week_days(reference)],
            meal_types=list(MealType),
            slots=slots,
            prev_week=format_date(reference - timedelta(days=7)),
            next_week=format_date(reference + timedelta(days=7)),
            active_page="admin_meals",
        )

    @app.route("/admin/speiseplan/<action>", methods=["POST"], endpoint="admin_meals_action")
    @role_required(Role.ADMIN)
    def admin_meals_action(action: str, auth):
        return run_action(actions, action, back_to="admin_meals", week=request.args.get("week"))
