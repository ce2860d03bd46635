from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import pytest

from kita_admin.announcements.model import Announcement
from kita_admin.children.model import Child
from kita_admin.dashboard.service import DashboardService
from kita_admin.meals.model import Meal
from kita_admin.schedules.model import ScheduleEntry


@dataclass
class InMemoryChildren:
    children: list[Child] = field(default_factory=list)

    def list_all(self):
        return list(self.children)

    def count(self):
        return len(self.children)


@dataclass
class InMemorySchedules:
    entries: list[ScheduleEntry] = field(default_factory=list)

    def list_for_date(self, day: str):
        return [e for e in self.entries if e.date == day]


@dataclass
class InMemoryMeals:
    meals: list[Meal] = field(default_factory=list)

    def list_for_date(self, day: str):
        return [m for m in self.meals if m.date == day]


@dataclass
class InMemoryAnnouncements:
    announcements: list[Announcement] = field(default_factory=list)

    def list_active(self, day: str):
        return [a for a in self.announcements if a.valid_from <= day <= a.valid_to]


class Counter:
    def __init__(self, n: int):
        self._n = n

    def count(self):
        return self._n


def _service(children=(), entries=(), meals=(), announcements=()) -> DashboardService:
    return DashboardService(
        children=InMemoryChildren(list(children)),
        schedules=InMemorySchedules(list(entries)),
        meals=InMemoryMeals(list(meals)),
        announcements=InMemoryAnnouncements(list(announcements)),
        groups=Counter(2),
        teachers=Counter(3),
    )


@pytest.mark.parametrize(
    "today,expected",
    [(datetime(2024, 6, 15, 9, 0), True), (datetime(2031, 6, 15, 9, 0), True), (datetime(2024, 6, 16, 9, 0), False)],
)
def test_birthday_matches_month_and_day_only(today, expected):
    child = Child(child_id="c1", first_name="Lia", last_name="Kern", birthdate="2020-06-15")
    snapshot = _service(children=[child]).snapshot(today)
    assert (child in snapshot.birthdays) is expected


def test_on_duty_includes_shift_boundaries(fixed_now):
    today = "2024-06-15"
    entries = [
        ScheduleEntry(entry_id="e1", teacher_id="t1", date=today, start_time="07:00", end_time="10:30"),
        ScheduleEntry(entry_id="e2", teacher_id="t2", date=today, start_time="10:30", end_time="18:00"),
        ScheduleEntry(entry_id="e3", teacher_id="t3", date=today, start_time="11:00", end_time="18:00"),
        ScheduleEntry(entry_id="e4", teacher_id="t4", date="2024-06-14", start_time="07:00", end_time="18:00"),
    ]
    snapshot = _service(entries=entries).snapshot(fixed_now)
    assert [e.entry_id for e in snapshot.on_duty] == ["e1", "e2"]


def test_meals_are_ordered_breakfast_lunch_snack(fixed_now):
    meals = [
        Meal(meal_id="m3", date="2024-06-15", meal_type="snack", description="Apfel"),
        Meal(meal_id="m1", date="2024-06-15", meal_type="fruehstueck", description="Brot"),
        Meal(meal_id="m2", date="2024-06-15", meal_type="mittagessen", description="Nudeln"),
        Meal(meal_id="m0", date="2024-06-14", meal_type="snack", description="Gestern"),
    ]
    snapshot = _service(meals=meals).snapshot(fixed_now)
    assert [m.meal_id for m in snapshot.meals] == ["m1", "m2", "m3"]


def test_announcement_window_is_inclusive(fixed_now):
    items = [
        Announcement("a1", "Start", "x", "2024-06-15", "2024-06-20", "normal"),
        Announcement("a2", "Ende", "x", "2024-06-10", "2024-06-15", "wichtig"),
        Announcement("a3", "Vorbei", "x", "2024-06-01", "2024-06-14", "normal"),
    ]
    snapshot = _service(announcements=items).snapshot(fixed_now)
    assert {a.announcement_id for a in snapshot.announcements} == {"a1", "a2"}


def test_counts():
    counts = _service(children=[Child("c1", "A", "B", "2020-01-01")]).counts()
    assert (counts.groups, counts.children, counts.teachers) == (2, 1, 3)
