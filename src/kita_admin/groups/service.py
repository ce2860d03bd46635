from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_fields
from ..core.exceptions import NotFound
from ..database.transaction import TransactionFactory
from .model import Group
from .repository import GroupRepository

logger = logging.getLogger(__name__)

ENTITY = "Gruppe"


class GroupService:
    """Create and edit groups. Deleting goes through the lifecycle guard."""

    def __init__(self, groups: GroupRepository, *, tx: TransactionFactory, clock: Callable[[], datetime] = now_local):
        self._groups = groups
        self._tx = tx
        self._clock = clock

    def list_all(self) -> Sequence[Group]:
        return self._groups.list_all()

    def create(self, *, name: str, color: str) -> str:
        fields = require_fields(ENTITY, "Name und Farbe sind erforderlich", name=name, color=color)
        with self._tx():
            group_id = self._groups.create(name=fields["name"], color=fields["color"], now=self._clock())
        logger.info("Created group %s", group_id)
        return group_id

    def edit(self, group_id: str, *, name: str, color: str) -> None:
        fields = require_fields(ENTITY, "Alle Felder sind erforderlich", id=group_id, name=name, color=color)
        with self._tx():
            if not self._groups.update(fields["id"], name=fields["name"], color=fields["color"], now=self._clock()):
                raise NotFound("Gruppe nicht gefunden")
