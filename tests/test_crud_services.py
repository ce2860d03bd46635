from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import func, select

from kita_admin.core.enums import Priority
from kita_admin.core.exceptions import (
    DuplicateEmail,
    DuplicateMealSlot,
    InvalidDateRange,
    InvalidTimeRange,
    NotFound,
    ValidationError,
)
from kita_admin.database.models import AnnouncementRow, GroupRow, ScheduleEntryRow
from kita_admin.database.transaction import transaction
from kita_admin.extensions import db
from kita_admin.groups.service import GroupService


def _rows(model) -> int:
    return db.session.scalar(select(func.count()).select_from(model))


@pytest.fixture
def teacher_id(container, ctx):
    return container.teacher_service.create(first_name="Max", last_name="Muster", email="max@kita.de")


def test_duplicate_teacher_email_is_rejected_and_first_record_unchanged(container, teacher_id):
    with pytest.raises(DuplicateEmail):
        container.teacher_service.create(first_name="Moritz", last_name="Anders", email="max@kita.de")

    teachers = container.teacher_service.list_all()
    assert [(t.first_name, t.last_name, t.email) for t in teachers] == [("Max", "Muster", "max@kita.de")]


def test_teacher_edit_may_keep_own_email_but_not_take_another(container, teacher_id):
    other = container.teacher_service.create(first_name="Ida", last_name="Roth", email="ida@kita.de")

    container.teacher_service.edit(teacher_id, first_name="Max", last_name="Meier", email="max@kita.de")
    assert container.teachers_repo.get_by_id(teacher_id).last_name == "Meier"

    with pytest.raises(DuplicateEmail):
        container.teacher_service.edit(other, first_name="Ida", last_name="Roth", email="max@kita.de")


def test_meal_slot_is_unique_per_date_and_type(container, ctx):
    container.meal_service.create(day="2024-06-10", meal_type="mittagessen", description="  Nudeln  ")

    with pytest.raises(DuplicateMealSlot):
        container.meal_service.create(day="2024-06-10", meal_type="mittagessen", description="Reis")

    container.meal_service.create(day="2024-06-10", meal_type="snack", description="Apfel")
    meals = container.meals_repo.list_for_date("2024-06-10")
    assert [(m.meal_type, m.description) for m in meals] == [("mittagessen", "Nudeln"), ("snack", "Apfel")]


def test_meal_edit_changes_description_only(container, ctx):
    meal_id = container.meal_service.create(day="2024-06-10", meal_type="fruehstueck", description="Brot")
    container.meal_service.edit(meal_id, description="Müsli")

    meal = container.meals_repo.get_by_id(meal_id)
    assert (meal.date, meal.meal_type, meal.description) == ("2024-06-10", "fruehstueck", "Müsli")


def test_meal_type_must_be_known(container, ctx):
    with pytest.raises(ValidationError):
        container.meal_service.create(day="2024-06-10", meal_type="abendbrot", description="Suppe")


def test_announcement_with_reversed_window_is_rejected(container, ctx):
    with pytest.raises(InvalidDateRange):
        container.announcement_service.create(
            title="Fest", message="Sommerfest", valid_from="2024-06-10", valid_to="2024-06-01"
        )
    assert _rows(AnnouncementRow) == 0


def test_announcement_priority_defaults_to_normal(container, ctx):
    announcement_id = container.announcement_service.create(
        title=" Fest ", message=" Sommerfest ", valid_from="2024-06-01", valid_to="2024-06-01", priority=""
    )
    stored = container.announcements_repo.get_by_id(announcement_id)
    assert stored.priority == "normal"
    assert (stored.title, stored.message) == ("Fest", "Sommerfest")


def test_schedule_start_must_precede_end(container, teacher_id):
    with pytest.raises(InvalidTimeRange):
        container.schedule_service.create(teacher_id=teacher_id, day="2024-06-10", start_time="14:00", end_time="07:00")
    with pytest.raises(InvalidTimeRange):
        container.schedule_service.create(teacher_id=teacher_id, day="2024-06-10", start_time="08:00", end_time="08:00")
    assert _rows(ScheduleEntryRow) == 0


def test_schedule_times_must_be_hhmm(container, teacher_id):
    with pytest.raises(ValidationError):
        container.schedule_service.create(teacher_id=teacher_id, day="2024-06-10", start_time="7:00", end_time="14:00")


def test_schedule_for_unknown_teacher_is_not_found(container, ctx):
    with pytest.raises(NotFound):
        container.schedule_service.create(teacher_id="nope", day="2024-06-10", start_time="07:00", end_time="14:00")


def test_schedule_edit_checks_range_and_unknown_id(container, teacher_id):
    entry_id = container.schedule_service.create(
        teacher_id=teacher_id, day="2024-06-10", start_time="07:00", end_time="14:00"
    )
    container.schedule_service.edit(entry_id, start_time="08:00", end_time="15:00")
    entry = container.schedules_repo.get_by_id(entry_id)
    assert (entry.start_time, entry.end_time) == ("08:00", "15:00")

    with pytest.raises(InvalidTimeRange):
        container.schedule_service.edit(entry_id, start_time="15:00", end_time="08:00")
    with pytest.raises(NotFound):
        container.schedule_service.edit("missing", start_time="08:00", end_time="15:00")


def test_missing_fields_name_the_entity_and_write_nothing(container, ctx):
    with pytest.raises(ValidationError) as exc:
        container.group_service.create(name="  ", color="#fff")
    assert exc.value.entity == "Gruppe"
    assert "Gruppe" in str(exc.value)
    assert _rows(GroupRow) == 0


def test_child_requires_existing_group_and_valid_birthdate(container, ctx):
    with pytest.raises(NotFound):
        container.child_service.create(first_name="A", last_name="B", birthdate="2020-01-01", group_id="nope")
    with pytest.raises(ValidationError):
        container.child_service.create(first_name="A", last_name="B", birthdate="01.01.2020")


def test_deleting_child_removes_parent_links(container, ctx):
    user_id = container.auth_service.sign_up(email="eva@kita.test", password="secret-123", name="Eva")
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")
    container.lifecycle.link_child_to_parent(user_id, child_id, "mutter")

    container.child_service.delete(child_id)

    assert container.children_repo.get_by_id(child_id) is None
    assert container.profiles_repo.list_children_for_parent(user_id) == []


def test_edit_of_unknown_id_is_not_found(container, ctx):
    with pytest.raises(NotFound):
        container.group_service.edit("missing", name="X", color="#000")
    with pytest.raises(NotFound):
        container.meal_service.edit("missing", description="X")
    with pytest.raises(NotFound):
        container.announcement_service.edit(
            "missing", title="T", message="M", valid_from="2024-01-01", valid_to="2024-01-02"
        )


def test_create_sets_both_timestamps_and_edit_refreshes_updated_at(app, ctx):
    times = iter([datetime(2024, 6, 1, 9, 0), datetime(2024, 6, 2, 9, 0)])
    svc = GroupService(app.extensions["kita_container"].groups_repo, tx=lambda: transaction(db.session),
                       clock=lambda: next(times))

    group_id = svc.create(name="Igel", color="#00aa00")
    row = db.session.get(GroupRow, group_id)
    assert row.created_at == row.updated_at == datetime(2024, 6, 1, 9, 0)

    svc.edit(group_id, name="Igel", color="#00bb00")
    row = db.session.get(GroupRow, group_id)
    assert row.created_at == datetime(2024, 6, 1, 9, 0)
    assert row.updated_at == datetime(2024, 6, 2, 9, 0)


def test_profile_updates_find_or_create(container, ctx):
    user_id = container.auth_service.sign_up(email="eva@kita.test", password="secret-123", name="Eva")
    container.profile_service.update_parent_profile(user_id, phone=" 0123 ", address="  ")
    profile = container.profiles_repo.get_parent_profile(user_id)
    assert (profile.phone, profile.address) == ("0123", None)

    container.profile_service.update_employee_profile(user_id, position="Leitung")
    assert container.profiles_repo.get_employee_profile(user_id).position == "Leitung"


def test_update_and_remove_child_link(container, ctx):
    user_id = container.auth_service.sign_up(email="eva@kita.test", password="secret-123", name="Eva")
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")
    link_id = container.lifecycle.link_child_to_parent(user_id, child_id, "mutter")

    container.profile_service.update_link(link_id, "vater")
    assert container.profiles_repo.get_link(link_id).relation == "vater"

    container.profile_service.unlink_child(link_id)
    assert container.profiles_repo.get_link(link_id) is None
    with pytest.raises(NotFound):
        container.profile_service.unlink_child(link_id)


def test_announcement_edit_replaces_fields(container, ctx):
    announcement_id = container.announcement_service.create(
        title="Fest", message="Sommerfest", valid_from="2024-06-01", valid_to="2024-06-10"
    )

    container.announcement_service.edit(
        announcement_id,
        title="Fest verschoben",
        message="Neuer Termin",
        valid_from="2024-06-05",
        valid_to="2024-06-20",
        priority="wichtig",
    )

    stored = container.announcements_repo.get_by_id(announcement_id)
    assert (stored.title, stored.valid_from, stored.valid_to, stored.priority) == (
        "Fest verschoben",
        "2024-06-05",
        "2024-06-20",
        "wichtig",
    )


@pytest.mark.parametrize("birthdate", ["2020-6-15", "2020-06-5", "20-06-15", "2020-02-30"])
def test_child_birthdate_must_be_zero_padded_iso(container, ctx, birthdate):
    with pytest.raises(ValidationError):
        container.child_service.create(first_name="Lia", last_name="Kern", birthdate=birthdate)
    assert container.child_service.list_all() == []


def test_padded_birthdate_shows_up_on_birthday(container, ctx):
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-06-15")

    snapshot = container.dashboard_service.snapshot(datetime(2024, 6, 15, 9, 0))

    assert [c.child_id for c in snapshot.birthdays] == [child_id]


def test_unpadded_announcement_date_is_a_format_error_not_a_range_error(container, ctx):
    with pytest.raises(ValidationError) as exc:
        container.announcement_service.create(
            title="Fest", message="Sommerfest", valid_from="2024-6-1", valid_to="2024-06-10"
        )
    assert exc.type is ValidationError
    assert _rows(AnnouncementRow) == 0

    container.announcement_service.create(
        title="Fest", message="Sommerfest", valid_from="2024-06-01", valid_to="2024-06-10"
    )
    assert _rows(AnnouncementRow) == 1


def test_stored_active_announcements_use_inclusive_window_and_newest_first(container, ctx):
    repo = container.announcements_repo

    def add(title, valid_from, valid_to, priority, created_at):
        repo.create(
            title=title, message="x", valid_from=valid_from, valid_to=valid_to, priority=priority, now=created_at
        )

    with transaction(db.session):
        add("ab heute", "2024-06-15", "2024-06-20", Priority.NORMAL, datetime(2024, 6, 1, 8, 0))
        add("bis heute", "2024-06-10", "2024-06-15", Priority.NORMAL, datetime(2024, 6, 2, 8, 0))
        add("wichtig", "2024-06-01", "2024-06-30", Priority.IMPORTANT, datetime(2024, 5, 1, 8, 0))
        add("abgelaufen", "2024-06-01", "2024-06-14", Priority.IMPORTANT, datetime(2024, 6, 3, 8, 0))
        add("ab morgen", "2024-06-16", "2024-06-30", Priority.IMPORTANT, datetime(2024, 6, 3, 9, 0))

    active = repo.list_active("2024-06-15")
    assert [a.title for a in active] == ["wichtig", "bis heute", "ab heute"]

    snapshot = container.dashboard_service.snapshot(datetime(2024, 6, 15, 9, 0))
    assert [a.title for a in snapshot.announcements] == ["wichtig", "bis heute", "ab heute"]
