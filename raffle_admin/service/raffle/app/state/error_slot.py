from typing import Optional

from raffle_admin.platform.exception.exceptions import CustomBaseError, ValidationError


class ErrorSlot:
    """The one error currently shown to the operator. Last error wins."""

    def __init__(self) -> None:
        self._error: Optional[CustomBaseError] = None

    @property
    def error(self) -> Optional[CustomBaseError]:
        return self._error

    @property
    def message(self) -> Optional[str]:
        return self._error.message if self._error else None

    @property
    def retriable(self) -> bool:
        return bool(self._error and self._error.retriable)

    @property
    def field_errors(self) -> dict[str, str]:
        if isinstance(self._error, ValidationError):
            return self._error.field_errors
        return {}

    def set(self, error: CustomBaseError) -> None:
        self._error = error

    def clear(self) -> None:
        self._error = None

    def dismiss(self) -> None:
        self._error = None
