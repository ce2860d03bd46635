from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from flask_login import login_user, logout_user

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError, InvalidRole
from ..extensions import login_manager
from .guard import LOGIN_ROUTE, dashboard_for_role, decide_access, session_user

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_manager.login_view = "login"

    @login_manager.user_loader
    def load_user(token: str):
        return container.auth_service.resolve(token)

    @app.route(LOGIN_ROUTE, methods=["GET", "POST"], endpoint="login")
    def login():
        decision = decide_access(session_user(), is_login_route=True)
        if not decision.allowed:
            return redirect(decision.redirect_to)

        email = ""
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                user = container.auth_service.sign_in(
                    email=email,
                    password=password,
                    ip_address=request.remote_addr,
                    user_agent=request.headers.get("User-Agent"),
                )
                login_user(user)
                return redirect(dashboard_for_role(user.role))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Login failed unexpectedly")
                raise

        return render_template("login.html", email=email)

    @app.route("/admin/logout", methods=["POST"], endpoint="logout")
    def logout():
        user = session_user()
        if user is not None:
            container.auth_service.sign_out(user.token)
        logout_user()
        flash("Abgemeldet", "info")
        return redirect(url_for("login"))

    @app.route("/api/auth/sign-up/email", methods=["POST"], endpoint="api_sign_up")
    def api_sign_up():
        payload = request.get_json(silent=True) or {}
        try:
            user_id = container.auth_service.sign_up(
                email=payload.get("email", ""),
                password=payload.get("password", ""),
                name=payload.get("name", ""),
            )
        except DomainError as e:
            return jsonify({"error": str(e)}), 400

        user = container.users_repo.get_by_id(user_id)
        return jsonify({"user": {"id": user.user_id, "email": user.email, "name": user.name, "role": user.role}})

    @app.route("/api/test/set-role", methods=["POST"], endpoint="api_test_set_role")
    def api_test_set_role():
        if not app.config.get("ENABLE_TEST_API"):
            return jsonify({"error": "Nicht verfügbar"}), 403

        payload = request.get_json(silent=True) or {}
        email = (payload.get("email") or "").strip().lower()
        role = (payload.get("role") or "").strip()
        if not email or not role:
            return jsonify({"error": "email und role sind erforderlich"}), 400
        if role not in {r.value for r in Role}:
            return jsonify({"error": "Ungültige Rolle"}), 400

        user = container.users_repo.get_by_email(email)
        if not user:
            return jsonify({"error": "Benutzer nicht gefunden"}), 404

        try:
            updated = container.lifecycle.set_role(user.user_id, role)
        except InvalidRole as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Test role change for %s failed", email)
            return jsonify({"error": "Interner Fehler"}), 500

        return jsonify({"success": True, "user": {"id": updated.user_id, "email": updated.email, "role": updated.role}})
