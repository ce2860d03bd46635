from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "admin"
    PARENT = "parent"
    EMPLOYEE = "employee"


class MealType(str, Enum):
    """Meal slot of a day. Declaration order is the display order."""

    BREAKFAST = "fruehstueck"
    LUNCH = "mittagessen"
    SNACK = "snack"


class Priority(str, Enum):
    NORMAL = "normal"
    IMPORTANT = "wichtig"


class RelationKind(str, Enum):
    """How a parent account relates to a linked child."""

    MOTHER = "mutter"
    FATHER = "vater"
    GUARDIAN = "erziehungsberechtigter"
