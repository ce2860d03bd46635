from __future__ import annotations

from datetime import date, datetime

import pytest

from kita_admin.database.bootstrap import ensure_admin, list_tables
from kita_admin.database.seeds import run_seed


def test_schema_has_all_tables(ctx):
    assert {
        "users",
        "sessions",
        "accounts",
        "child_groups",
        "children",
        "teachers",
        "schedule_entries",
        "meals",
        "announcements",
        "parent_profiles",
        "child_links",
        "employee_profiles",
    } <= set(list_tables())


def test_testing_profile_is_deterministic(container, ctx):
    now = datetime(2024, 6, 12, 10, 0)  # a Wednesday
    counts = run_seed("testing", today=now.date(), now=now)

    assert counts == {"groups": 2, "teachers": 2, "children": 3, "schedules": 10, "meals": 15, "announcements": 2}
    assert container.groups_repo.get_by_id("test-group-1").name == "Testgruppe Rot"

    snapshot = container.dashboard_service.snapshot(now)
    assert [c.child_id for c in snapshot.birthdays] == ["test-child-1"]
    assert {e.teacher_id for e in snapshot.on_duty} == {"test-teacher-1"}
    assert [m.meal_type for m in snapshot.meals] == ["fruehstueck", "mittagessen", "snack"]
    assert [a.priority for a in snapshot.announcements] == ["wichtig", "normal"]


def test_reseeding_replaces_data(container, ctx):
    run_seed("demo", today=date(2024, 6, 12))
    run_seed("testing", today=date(2024, 6, 12))
    assert container.groups_repo.count() == 2


def test_unknown_profile_is_rejected(ctx):
    with pytest.raises(ValueError):
        run_seed("production")


def test_ensure_admin_allows_login(container, ctx):
    ensure_admin("Chef@Kita.test", "admin-pass-123")
    ensure_admin("chef@kita.test", "new-pass-456")

    user = container.auth_service.sign_in(email="chef@kita.test", password="new-pass-456")
    assert user.role == "admin"
