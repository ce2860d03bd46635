from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Priority


@dataclass(frozen=True)
class Announcement:
    announcement_id: str
    title: str
    message: str
    valid_from: str
    valid_to: str
    priority: str
    created_at: Optional[datetime] = None

    @property
    def important(self) -> bool:
        return self.priority == Priority.IMPORTANT.value
