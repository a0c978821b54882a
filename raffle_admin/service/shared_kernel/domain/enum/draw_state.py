"""Draw State Enum"""

from enum import StrEnum
from typing import Any, Optional


class DrawState(StrEnum):
    ACTIVE = 'ACTIVO'
    DONE = 'REALIZADO'
    CANCELLED = 'CANCELADO'

    @classmethod
    def parse(cls, raw: Any) -> Optional['DrawState']:
        text = str(raw or '').strip().upper()
        for state in cls:
            if state.value == text:
                return state
        return None
