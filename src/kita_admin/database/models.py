"""ORM tables.

Foreign keys carry no ON DELETE CASCADE: services remove dependent rows
explicitly inside one transaction.
"""

import uuid
from datetime import datetime

from sqlalchemy import UniqueConstraint

from ..extensions import db


def _uuid() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.now)


class UserRow(TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    email_verified = db.Column(db.Boolean, nullable=False, default=False)
    image = db.Column(db.String(500))
    role = db.Column(db.String(20), nullable=False, default="parent")  # admin / parent / employee


class SessionRow(TimestampMixin, db.Model):
    __tablename__ = "sessions"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    token = db.Column(db.String(128), unique=True, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(500))


class AccountRow(TimestampMixin, db.Model):
    __tablename__ = "accounts"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    account_id = db.Column(db.String(255), nullable=False)
    provider_id = db.Column(db.String(50), nullable=False)
    password = db.Column(db.String(255))


class GroupRow(TimestampMixin, db.Model):
    __tablename__ = "child_groups"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(100), nullable=False)
    color = db.Column(db.String(20), nullable=False)  # hex, e.g. "#FF5733"


class ChildRow(TimestampMixin, db.Model):
    __tablename__ = "children"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    birthdate = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD
    group_id = db.Column(db.String(36), db.ForeignKey("child_groups.id"), index=True)
    photo_path = db.Column(db.String(500))

    group = db.relationship("GroupRow", lazy="joined")


class TeacherRow(TimestampMixin, db.Model):
    __tablename__ = "teachers"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    photo_path = db.Column(db.String(500))


class ScheduleEntryRow(TimestampMixin, db.Model):
    __tablename__ = "schedule_entries"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    teacher_id = db.Column(db.String(36), db.ForeignKey("teachers.id"), nullable=False, index=True)
    date = db.Column(db.String(10), nullable=False, index=True)  # YYYY-MM-DD
    start_time = db.Column(db.String(5), nullable=False)  # HH:MM
    end_time = db.Column(db.String(5), nullable=False)  # HH:MM

    teacher = db.relationship("TeacherRow", lazy="joined")


class MealRow(TimestampMixin, db.Model):
    __tablename__ = "meals"
    __table_args__ = (UniqueConstraint("date", "meal_type", name="uix_meal_date_type"),)

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    date = db.Column(db.String(10), nullable=False, index=True)
    meal_type = db.Column(db.String(20), nullable=False)
    description = db.Column(db.Text, nullable=False)


class AnnouncementRow(TimestampMixin, db.Model):
    __tablename__ = "announcements"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    valid_from = db.Column(db.String(10), nullable=False)
    valid_to = db.Column(db.String(10), nullable=False)
    priority = db.Column(db.String(20), nullable=False, default="normal")


class ParentProfileRow(TimestampMixin, db.Model):
    __tablename__ = "parent_profiles"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), unique=True, nullable=False)
    phone = db.Column(db.String(50))
    address = db.Column(db.String(500))


class ChildLinkRow(TimestampMixin, db.Model):
    __tablename__ = "child_links"
    __table_args__ = (UniqueConstraint("parent_profile_id", "child_id", name="uix_parent_child"),)

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    parent_profile_id = db.Column(db.String(36), db.ForeignKey("parent_profiles.id"), nullable=False, index=True)
    child_id = db.Column(db.String(36), db.ForeignKey("children.id"), nullable=False, index=True)
    relation = db.Column(db.String(30), nullable=False, default="erziehungsberechtigter")

    child = db.relationship("ChildRow", lazy="joined")


class EmployeeProfileRow(TimestampMixin, db.Model):
    __tablename__ = "employee_profiles"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), unique=True, nullable=False)
    teacher_id = db.Column(db.String(36), db.ForeignKey("teachers.id"), unique=True)
    position = db.Column(db.String(100))

    teacher = db.relationship("TeacherRow", lazy="joined")
