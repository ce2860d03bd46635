"""Read-only projections for the public dashboard, the kiosk and /admin."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from ..announcements.model import Announcement
from ..announcements.repository import AnnouncementRepository
from ..children.model import Child
from ..children.repository import ChildRepository
from ..common.datetime_utils import format_date, format_time
from ..groups.repository import GroupRepository
from ..meals.model import Meal
from ..meals.repository import MealRepository
from ..schedules.model import ScheduleEntry
from ..schedules.repository import ScheduleRepository
from ..teachers.repository import TeacherRepository


@dataclass(frozen=True)
class Snapshot:
    today: str
    now_time: str
    birthdays: Sequence[Child] = field(default_factory=list)
    on_duty: Sequence[ScheduleEntry] = field(default_factory=list)
    meals: Sequence[Meal] = field(default_factory=list)
    announcements: Sequence[Announcement] = field(default_factory=list)


@dataclass(frozen=True)
class Counts:
    groups: int
    children: int
    teachers: int


class DashboardService:
    def __init__(
        self,
        *,
        children: ChildRepository,
        schedules: ScheduleRepository,
        meals: MealRepository,
        announcements: AnnouncementRepository,
        groups: GroupRepository,
        teachers: TeacherRepository,
    ):
        self._children = children
        self._schedules = schedules
        self._meals = meals
        self._announcements = announcements
        self._groups = groups
        self._teachers = teachers

    def snapshot(self, now: datetime) -> Snapshot:
        today = format_date(now.date())
        now_time = format_time(now)
        month_day = today[5:]

        birthdays = [c for c in self._children.list_all() if c.month_day == month_day]
        on_duty = [e for e in self._schedules.list_for_date(today) if e.covers(now_time)]
        meals = sorted(self._meals.list_for_date(today), key=lambda m: m.slot_order)

        return Snapshot(
            today=today,
            now_time=now_time,
            birthdays=birthdays,
            on_duty=on_duty,
            meals=meals,
            announcements=list(self._announcements.list_active(today)),
        )

    def counts(self) -> Counts:
        return Counts(
            groups=self._groups.count(),
            children=self._children.count(),
            teachers=self._teachers.count(),
        )
