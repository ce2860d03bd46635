from __future__ import annotations

from flask import Flask, render_template

from ..auth.guard import role_required, session_user
from ..common.datetime_utils import now_local
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    @app.route("/", endpoint="home")
    def home():
        return render_template("dashboard.html", snapshot=dashboard.snapshot(now_local()), auth=session_user())

    @app.route("/kinder-ansicht", endpoint="kiosk")
    def kiosk():
        return render_template("kiosk.html", snapshot=dashboard.snapshot(now_local()))

    @app.route("/admin", endpoint="admin_dashboard")
    @role_required(Role.ADMIN)
    def admin_dashboard(auth):
        return render_template(
            "admin/dashboard.html",
            auth=auth,
            counts=dashboard.counts(),
            snapshot=dashboard.snapshot(now_local()),
            active_page="admin_dashboard",
        )
