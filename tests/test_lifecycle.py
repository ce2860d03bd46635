from __future__ import annotations

import pytest
from sqlalchemy import func, select

from kita_admin.core.exceptions import (
    DuplicateLink,
    GroupHasChildren,
    InvalidRelationKind,
    InvalidRole,
    LastAdminProtected,
    NotFound,
    TeacherAlreadyLinked,
    TeacherHasSchedule,
    TeacherNotFound,
)
from kita_admin.database.models import (
    AccountRow,
    ChildLinkRow,
    EmployeeProfileRow,
    ParentProfileRow,
    SessionRow,
    UserRow,
)
from kita_admin.extensions import db


def _count(model, *where) -> int:
    stmt = select(func.count()).select_from(model)
    for clause in where:
        stmt = stmt.where(clause)
    return db.session.scalar(stmt)


@pytest.fixture
def svc(container, ctx):
    return container.lifecycle


@pytest.fixture
def user_id(container, ctx):
    return container.auth_service.sign_up(email="eva@kita.test", password="secret-123", name="Eva")


@pytest.mark.parametrize("role", ["admin", "parent", "employee"])
def test_set_role_updates_role_and_creates_profile(svc, container, user_id, role):
    svc.set_role(user_id, role)

    assert container.users_repo.get_by_id(user_id).role == role
    if role == "parent":
        assert container.profiles_repo.get_parent_profile(user_id) is not None
    if role == "employee":
        assert container.profiles_repo.get_employee_profile(user_id) is not None


def test_set_role_twice_keeps_single_profile(svc, user_id):
    svc.set_role(user_id, "employee")
    svc.set_role(user_id, "employee")
    assert _count(EmployeeProfileRow, EmployeeProfileRow.user_id == user_id) == 1

    svc.set_role(user_id, "parent")
    svc.set_role(user_id, "parent")
    assert _count(ParentProfileRow, ParentProfileRow.user_id == user_id) == 1


def test_previous_role_profile_is_retained(svc, container, user_id):
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")
    svc.link_child_to_parent(user_id, child_id, "mutter")

    svc.set_role(user_id, "employee")

    assert container.profiles_repo.get_parent_profile(user_id) is not None
    assert len(container.profiles_repo.list_children_for_parent(user_id)) == 1


def test_set_role_rejects_unknown_role_and_user(svc, user_id):
    with pytest.raises(InvalidRole):
        svc.set_role(user_id, "superuser")
    with pytest.raises(NotFound):
        svc.set_role("missing", "admin")


def test_last_admin_cannot_be_deleted(svc, user_id):
    svc.set_role(user_id, "admin")
    users_before = _count(UserRow)

    with pytest.raises(LastAdminProtected):
        svc.delete_user(user_id)

    assert _count(UserRow) == users_before


def test_either_admin_can_be_deleted_once_two_exist(svc, container, user_id):
    other = container.auth_service.sign_up(email="otto@kita.test", password="secret-123", name="Otto")
    svc.set_role(user_id, "admin")
    svc.set_role(other, "admin")

    svc.delete_user(other)

    assert container.users_repo.get_by_id(other) is None
    with pytest.raises(LastAdminProtected):
        svc.delete_user(user_id)


def test_delete_user_removes_dependent_rows(svc, container, user_id):
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")
    svc.link_child_to_parent(user_id, child_id, "vater")
    svc.set_role(user_id, "employee")
    container.auth_service.sign_in(email="eva@kita.test", password="secret-123")

    svc.delete_user(user_id)

    assert _count(UserRow, UserRow.id == user_id) == 0
    assert _count(ParentProfileRow, ParentProfileRow.user_id == user_id) == 0
    assert _count(EmployeeProfileRow, EmployeeProfileRow.user_id == user_id) == 0
    assert _count(SessionRow, SessionRow.user_id == user_id) == 0
    assert _count(AccountRow, AccountRow.user_id == user_id) == 0
    assert _count(ChildLinkRow) == 0
    assert container.children_repo.get_by_id(child_id) is not None


def test_delete_unknown_user_is_not_found(svc):
    with pytest.raises(NotFound):
        svc.delete_user("missing")


def test_group_with_children_cannot_be_deleted_until_empty(svc, container):
    group_id = container.group_service.create(name="Bären", color="#aa5500")
    child_id = container.child_service.create(
        first_name="Tim", last_name="Bauer", birthdate="2021-03-04", group_id=group_id
    )

    with pytest.raises(GroupHasChildren):
        svc.delete_group(group_id)

    container.child_service.edit(child_id, first_name="Tim", last_name="Bauer", birthdate="2021-03-04", group_id="")
    svc.delete_group(group_id)
    assert container.groups_repo.get_by_id(group_id) is None


def test_teacher_with_schedule_cannot_be_deleted_until_cleared(svc, container):
    teacher_id = container.teacher_service.create(first_name="Max", last_name="Muster", email="max@kita.de")
    entry_id = container.schedule_service.create(
        teacher_id=teacher_id, day="2024-06-10", start_time="07:00", end_time="14:00"
    )

    with pytest.raises(TeacherHasSchedule):
        svc.delete_teacher(teacher_id)

    container.schedule_service.delete(entry_id)
    svc.delete_teacher(teacher_id)
    assert container.teachers_repo.get_by_id(teacher_id) is None


def test_deleting_teacher_clears_employee_link(svc, container, user_id):
    teacher_id = container.teacher_service.create(first_name="Ida", last_name="Roth", email="ida@kita.de")
    svc.link_teacher_to_employee(user_id, teacher_id)

    svc.delete_teacher(teacher_id)

    assert container.profiles_repo.get_employee_profile(user_id).teacher_id is None


def test_link_child_creates_profile_and_rejects_duplicates(svc, container, user_id):
    svc.set_role(user_id, "admin")
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")

    svc.link_child_to_parent(user_id, child_id, "erziehungsberechtigter")
    with pytest.raises(DuplicateLink):
        svc.link_child_to_parent(user_id, child_id, "mutter")

    assert _count(ChildLinkRow) == 1


def test_link_child_defaults_to_guardian(svc, container, user_id):
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")
    link_id = svc.link_child_to_parent(user_id, child_id, "")
    assert container.profiles_repo.get_link(link_id).relation == "erziehungsberechtigter"


def test_link_child_validation(svc, container, user_id):
    child_id = container.child_service.create(first_name="Lia", last_name="Kern", birthdate="2020-01-02")
    with pytest.raises(InvalidRelationKind):
        svc.link_child_to_parent(user_id, child_id, "tante")
    with pytest.raises(NotFound):
        svc.link_child_to_parent(user_id, "missing", "mutter")
    with pytest.raises(NotFound):
        svc.link_child_to_parent("missing", child_id, "mutter")


def test_link_teacher_rules(svc, container, user_id):
    other = container.auth_service.sign_up(email="otto@kita.test", password="secret-123", name="Otto")
    teacher_id = container.teacher_service.create(first_name="Ida", last_name="Roth", email="ida@kita.de")

    with pytest.raises(TeacherNotFound):
        svc.link_teacher_to_employee(user_id, "missing")

    svc.link_teacher_to_employee(user_id, teacher_id)
    # re-linking the same pair is a no-op
    svc.link_teacher_to_employee(user_id, teacher_id)
    assert container.profiles_repo.get_employee_profile(user_id).teacher_id == teacher_id

    with pytest.raises(TeacherAlreadyLinked):
        svc.link_teacher_to_employee(other, teacher_id)
