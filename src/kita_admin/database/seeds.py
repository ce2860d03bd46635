"""Seed profiles.

``testing`` inserts a small deterministic data set with ``test-*`` ids
(one child always has a birthday today). ``demo`` inserts a larger,
realistic-looking data set for showcasing. Both clear the application
tables first; user accounts are kept.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Optional

from sqlalchemy import delete, update

from ..common.datetime_utils import format_date, week_days
from ..core.enums import MealType, Priority
from ..extensions import db
from .models import (
    AnnouncementRow,
    ChildLinkRow,
    ChildRow,
    EmployeeProfileRow,
    GroupRow,
    MealRow,
    ScheduleEntryRow,
    TeacherRow,
)

logger = logging.getLogger(__name__)

GROUP_PRESETS = [
    ("Sonnenkinder", "#FFD93D"),
    ("Regenbogen", "#6BCB77"),
    ("Sternschnuppen", "#4D96FF"),
    ("Marienkäfer", "#FF6B6B"),
    ("Schmetterlinge", "#C77DFF"),
]

FIRST_NAMES = [
    "Emma", "Mia", "Hannah", "Sofia", "Lina", "Ella", "Clara", "Lea",
    "Noah", "Ben", "Paul", "Leon", "Finn", "Elias", "Felix", "Jonas",
]

LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer", "Wagner", "Becker",
    "Schulz", "Hoffmann", "Koch", "Richter", "Klein", "Wolf", "Schröder", "Neumann",
]

TEACHER_FIRST_NAMES = ["Anna", "Julia", "Sabine", "Katrin", "Thomas", "Petra", "Lisa", "Markus"]

SHIFT_PRESETS = [("07:00", "14:00"), ("08:00", "15:00"), ("09:00", "16:00"), ("11:00", "18:00")]

MEAL_DESCRIPTIONS = {
    MealType.BREAKFAST: ["Vollkornbrot mit Käse", "Müsli mit Obst", "Brötchen mit Marmelade", "Joghurt mit Beeren"],
    MealType.LUNCH: ["Nudeln mit Tomatensoße", "Gemüsesuppe", "Kartoffeln mit Quark", "Reis mit Gemüsecurry"],
    MealType.SNACK: ["Apfelschnitze", "Reiswaffeln", "Gemüsesticks mit Dip", "Bananen"],
}

ANNOUNCEMENT_TEMPLATES = [
    ("Elternabend", "Am Donnerstag um 19 Uhr findet der Elternabend statt.", Priority.IMPORTANT),
    ("Ausflug in den Zoo", "Bitte an wetterfeste Kleidung und Brotdose denken.", Priority.NORMAL),
    ("Fotograf", "Nächste Woche kommt der Fotograf in die Kita.", Priority.NORMAL),
    ("Schließtag", "Die Kita bleibt wegen Fortbildung geschlossen.", Priority.IMPORTANT),
]

_UMLAUTS = str.maketrans({"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss"})


def _test_id(kind: str, n: int) -> str:
    return f"test-{kind}-{n}"


def _uuid() -> str:
    return str(uuid.uuid4())


def clear_data() -> None:
    """Remove application data. Links and teacher references go first."""
    db.session.execute(delete(ChildLinkRow))
    db.session.execute(update(EmployeeProfileRow).values(teacher_id=None))
    for model in (ScheduleEntryRow, MealRow, AnnouncementRow, ChildRow, TeacherRow, GroupRow):
        db.session.execute(delete(model))
    db.session.flush()


def seed_testing(today: date, now: datetime) -> Dict[str, int]:
    today_s = format_date(today)
    groups = [
        GroupRow(id=_test_id("group", 1), name="Testgruppe Rot", color="#FF6B6B", created_at=now, updated_at=now),
        GroupRow(id=_test_id("group", 2), name="Testgruppe Blau", color="#4ECDC4", created_at=now, updated_at=now),
    ]
    teachers = [
        TeacherRow(
            id=_test_id("teacher", 1), first_name="Test", last_name="Lehrer",
            email="test.lehrer@kita.de", created_at=now, updated_at=now,
        ),
        TeacherRow(
            id=_test_id("teacher", 2), first_name="Test", last_name="Erzieherin",
            email="test.erzieherin@kita.de", created_at=now, updated_at=now,
        ),
    ]
    children = [
        ChildRow(
            id=_test_id("child", 1), first_name="Test", last_name="Kind", birthdate=f"2020-{today_s[5:]}",
            group_id=groups[0].id, created_at=now, updated_at=now,
        ),
        ChildRow(
            id=_test_id("child", 2), first_name="Anna", last_name="Testermann", birthdate="2021-06-15",
            group_id=groups[0].id, created_at=now, updated_at=now,
        ),
        ChildRow(
            id=_test_id("child", 3), first_name="Max", last_name="Mustermann", birthdate="2020-03-22",
            group_id=groups[1].id, created_at=now, updated_at=now,
        ),
    ]

    schedules = []
    for teacher, (start, end) in zip(teachers, [("07:00", "14:00"), ("11:00", "18:00")]):
        for day in week_days(today):
            schedules.append(
                ScheduleEntryRow(
                    id=_test_id("schedule", len(schedules) + 1), teacher_id=teacher.id, date=format_date(day),
                    start_time=start, end_time=end, created_at=now, updated_at=now,
                )
            )

    descriptions = {
        MealType.BREAKFAST: "Brot mit Käse",
        MealType.LUNCH: "Nudeln mit Soße",
        MealType.SNACK: "Obst und Gemüse",
    }
    meals = []
    for i, day in enumerate(week_days(today), start=1):
        for meal_type in MealType:
            meals.append(
                MealRow(
                    id=_test_id("meal", len(meals) + 1), date=format_date(day), meal_type=meal_type.value,
                    description=f"{descriptions[meal_type]} - Tag {i}", created_at=now, updated_at=now,
                )
            )

    next_week = format_date(today + timedelta(days=7))
    announcements = [
        AnnouncementRow(
            id=_test_id("announcement", 1), title="Test Wichtige Ankündigung",
            message="Dies ist eine wichtige Test-Ankündigung.", valid_from=today_s, valid_to=next_week,
            priority=Priority.IMPORTANT.value, created_at=now, updated_at=now,
        ),
        AnnouncementRow(
            id=_test_id("announcement", 2), title="Test Normale Ankündigung",
            message="Dies ist eine normale Test-Ankündigung.", valid_from=today_s, valid_to=next_week,
            priority=Priority.NORMAL.value, created_at=now, updated_at=now,
        ),
    ]

    return _insert(groups=groups, teachers=teachers, children=children, schedules=schedules, meals=meals,
                   announcements=announcements)


def seed_demo(today: date, now: datetime, *, rng: Optional[random.Random] = None) -> Dict[str, int]:
    rng = rng or random.Random()

    groups = [GroupRow(id=_uuid(), name=name, color=color, created_at=now, updated_at=now)
              for name, color in GROUP_PRESETS]

    teacher_last_names = rng.sample(LAST_NAMES, len(TEACHER_FIRST_NAMES))
    teachers = []
    for first, last in zip(TEACHER_FIRST_NAMES, teacher_last_names):
        email = f"{first}.{last}".lower().translate(_UMLAUTS) + "@kita.de"
        teachers.append(
            TeacherRow(id=_uuid(), first_name=first, last_name=last, email=email, created_at=now, updated_at=now)
        )

    children = []
    for i in range(25):
        age_days = rng.randint(365 * 2, 365 * 6)
        children.append(
            ChildRow(
                id=_uuid(), first_name=rng.choice(FIRST_NAMES), last_name=rng.choice(LAST_NAMES),
                birthdate=format_date(today - timedelta(days=age_days)), group_id=groups[i % len(groups)].id,
                created_at=now, updated_at=now,
            )
        )
    # Someone always has a birthday on the dashboard.
    children[0].birthdate = f"{today.year - 4}-{format_date(today)[5:]}"

    days = week_days(today) + week_days(today + timedelta(days=7))
    schedules = []
    meals = []
    for day in days:
        for teacher in teachers:
            start, end = rng.choice(SHIFT_PRESETS)
            schedules.append(
                ScheduleEntryRow(id=_uuid(), teacher_id=teacher.id, date=format_date(day), start_time=start,
                                 end_time=end, created_at=now, updated_at=now)
            )
        for meal_type in MealType:
            meals.append(
                MealRow(id=_uuid(), date=format_date(day), meal_type=meal_type.value,
                        description=rng.choice(MEAL_DESCRIPTIONS[meal_type]), created_at=now, updated_at=now)
            )

    announcements = []
    for offset, (title, message, priority) in enumerate(ANNOUNCEMENT_TEMPLATES):
        start = today + timedelta(days=offset * 3 - 2)
        announcements.append(
            AnnouncementRow(id=_uuid(), title=title, message=message, valid_from=format_date(start),
                            valid_to=format_date(start + timedelta(days=6)), priority=priority.value,
                            created_at=now, updated_at=now)
        )

    return _insert(groups=groups, teachers=teachers, children=children, schedules=schedules, meals=meals,
                   announcements=announcements)


def _insert(**rows_by_kind) -> Dict[str, int]:
    # Parents before dependants so MySQL foreign keys hold at flush time.
    for kind in ("groups", "teachers", "children", "schedules", "meals", "announcements"):
        db.session.add_all(rows_by_kind[kind])
        db.session.flush()
    return {kind: len(rows) for kind, rows in rows_by_kind.items()}


PROFILES: Dict[str, Callable[..., Dict[str, int]]] = {
    "testing": seed_testing,
    "demo": seed_demo,
}


def run_seed(profile: str, *, today: Optional[date] = None, now: Optional[datetime] = None) -> Dict[str, int]:
    """Clear application data and insert ``profile``. Commits on success."""
    if profile not in PROFILES:
        raise ValueError(f"Unknown seed profile '{profile}'. Available: {', '.join(sorted(PROFILES))}")

    now = now or datetime.now()
    today = today or now.date()
    try:
        clear_data()
        counts = PROFILES[profile](today, now)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Seeded profile %s: %s", profile, counts)
    return counts
