from __future__ import annotations

from dataclasses import dataclass

from .announcements.service import AnnouncementService
from .announcements.sql_announcement_repository import SqlAnnouncementRepository
from .auth.service import AuthService
from .auth.sql_auth_repository import SqlAuthRepository
from .children.service import ChildService
from .children.sql_child_repository import SqlChildRepository
from .dashboard.service import DashboardService
from .database.transaction import transaction
from .groups.service import GroupService
from .groups.sql_group_repository import SqlGroupRepository
from .lifecycle.service import RoleProfileLifecycle
from .meals.service import MealService
from .meals.sql_meal_repository import SqlMealRepository
from .profiles.service import ProfileService
from .profiles.sql_profile_repository import SqlProfileRepository
from .schedules.service import ScheduleService
from .schedules.sql_schedule_repository import SqlScheduleRepository
from .teachers.service import TeacherService
from .teachers.sql_teacher_repository import SqlTeacherRepository
from .uploads.service import UploadService
from .users.sql_user_repository import SqlUserRepository


@dataclass(frozen=True)
class Container:
    users_repo: SqlUserRepository
    auth_repo: SqlAuthRepository
    profiles_repo: SqlProfileRepository
    groups_repo: SqlGroupRepository
    children_repo: SqlChildRepository
    teachers_repo: SqlTeacherRepository
    schedules_repo: SqlScheduleRepository
    meals_repo: SqlMealRepository
    announcements_repo: SqlAnnouncementRepository

    auth_service: AuthService
    lifecycle: RoleProfileLifecycle
    profile_service: ProfileService
    group_service: GroupService
    child_service: ChildService
    teacher_service: TeacherService
    schedule_service: ScheduleService
    meal_service: MealService
    announcement_service: AnnouncementService
    dashboard_service: DashboardService
    upload_service: UploadService


def build_container(*, db, session_days: int, upload_dir: str, max_upload_bytes: int) -> Container:
    # Flask-SQLAlchemy's session is request scoped; resolve it per transaction.
    def tx():
        return transaction(db.session)

    users_repo = SqlUserRepository(db)
    auth_repo = SqlAuthRepository(db)
    profiles_repo = SqlProfileRepository(db)
    groups_repo = SqlGroupRepository(db)
    children_repo = SqlChildRepository(db)
    teachers_repo = SqlTeacherRepository(db)
    schedules_repo = SqlScheduleRepository(db)
    meals_repo = SqlMealRepository(db)
    announcements_repo = SqlAnnouncementRepository(db)

    auth_service = AuthService(users_repo, auth_repo, profiles_repo, tx=tx, session_days=session_days)
    lifecycle = RoleProfileLifecycle(
        users=users_repo,
        auth=auth_repo,
        profiles=profiles_repo,
        groups=groups_repo,
        children=children_repo,
        teachers=teachers_repo,
        schedules=schedules_repo,
        tx=tx,
    )
    dashboard_service = DashboardService(
        children=children_repo,
        schedules=schedules_repo,
        meals=meals_repo,
        announcements=announcements_repo,
        groups=groups_repo,
        teachers=teachers_repo,
    )

    return Container(
        users_repo=users_repo,
        auth_repo=auth_repo,
        profiles_repo=profiles_repo,
        groups_repo=groups_repo,
        children_repo=children_repo,
        teachers_repo=teachers_repo,
        schedules_repo=schedules_repo,
        meals_repo=meals_repo,
        announcements_repo=announcements_repo,
        auth_service=auth_service,
        lifecycle=lifecycle,
        profile_service=ProfileService(profiles_repo, users_repo, tx=tx),
        group_service=GroupService(groups_repo, tx=tx),
        child_service=ChildService(children_repo, groups_repo, profiles_repo, tx=tx),
        teacher_service=TeacherService(teachers_repo, tx=tx),
        schedule_service=ScheduleService(schedules_repo, teachers_repo, tx=tx),
        meal_service=MealService(meals_repo, tx=tx),
        announcement_service=AnnouncementService(announcements_repo, tx=tx),
        dashboard_service=dashboard_service,
        upload_service=UploadService(upload_dir, max_bytes=max_upload_bytes),
    )
