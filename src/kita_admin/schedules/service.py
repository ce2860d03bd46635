from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import format_date, monday_of, now_local, sunday_of
from ..common.validators import optional, require_fields, require_hhmm, require_iso_date
from ..core.exceptions import InvalidTimeRange, NotFound, ValidationError
from ..database.transaction import TransactionFactory
from ..teachers.repository import TeacherRepository
from .model import ScheduleEntry
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

ENTITY = "Dienstplan"


def _check_range(start_time: str, end_time: str) -> None:
    require_hhmm(start_time, "Startzeit", entity=ENTITY)
    require_hhmm(end_time, "Endzeit", entity=ENTITY)
    # Same-day shifts only, so HH:MM order is time order.
    if start_time >= end_time:
        raise InvalidTimeRange("Startzeit muss vor Endzeit liegen", entity=ENTITY)


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        teachers: TeacherRepository,
        *,
        tx: TransactionFactory,
        clock: Callable[[], datetime] = now_local,
    ):
        self._schedules = schedules
        self._teachers = teachers
        self._tx = tx
        self._clock = clock

    def week(self, reference: date) -> tuple[str, str, Sequence[ScheduleEntry]]:
        """Monday..Sunday of the week containing ``reference``."""
        start = format_date(monday_of(reference))
        end = format_date(sunday_of(reference))
        return start, end, self._schedules.list_range(start=start, end=end)

    def create(self, *, teacher_id: str, day: str, start_time: str, end_time: str) -> str:
        fields = require_fields(
            ENTITY,
            "Alle Felder sind erforderlich",
            teacher_id=teacher_id,
            day=day,
            start_time=start_time,
            end_time=end_time,
        )
        require_iso_date(fields["day"], "Datum", entity=ENTITY)
        _check_range(fields["start_time"], fields["end_time"])

        with self._tx():
            if not self._teachers.get_by_id(fields["teacher_id"]):
                raise NotFound("Erzieher nicht gefunden")
            entry_id = self._schedules.create(
                teacher_id=fields["teacher_id"],
                day=fields["day"],
                start_time=fields["start_time"],
                end_time=fields["end_time"],
                now=self._clock(),
            )
        logger.info("Created schedule entry %s for teacher %s on %s", entry_id, fields["teacher_id"], fields["day"])
        return entry_id

    def edit(self, entry_id: str, *, start_time: str, end_time: str) -> None:
        fields = require_fields(
            ENTITY, "Alle Felder sind erforderlich", id=entry_id, start_time=start_time, end_time=end_time
        )
        _check_range(fields["start_time"], fields["end_time"])

        with self._tx():
            updated = self._schedules.update_times(
                fields["id"], start_time=fields["start_time"], end_time=fields["end_time"], now=self._clock()
            )
            if not updated:
                raise NotFound("Dienstplan-Eintrag nicht gefunden")

    def delete(self, entry_id: Optional[str]) -> None:
        entry_id = optional(entry_id)
        if not entry_id:
            raise ValidationError("ID ist erforderlich", entity=ENTITY)
        with self._tx():
            if not self._schedules.delete(entry_id):
                raise NotFound("Dienstplan-Eintrag nicht gefunden")
