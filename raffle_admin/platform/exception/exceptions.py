from typing import Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    retriable: bool = False

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Local, pre-network rejection. Never leaves the form that produced it."""

    def __init__(self, message: str, field_errors: Optional[dict[str, str]] = None) -> None:
        super().__init__(message, 422)
        self.field_errors: dict[str, str] = dict(field_errors or {})


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class SeatNotFoundError(NotFoundError):
    def __init__(self, seat_number: int, draw_id: Optional[int] = None) -> None:
        where = f' in draw {draw_id}' if draw_id is not None else ''
        super().__init__(f'Seat {seat_number:02d} not found{where}')
        self.seat_number = seat_number
        self.draw_id = draw_id


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str = 'Session expired, please log in again') -> None:
        super().__init__(message, 401)


class UnexpectedShapeError(CustomBaseError):
    """Backend answered 2xx with a payload the client cannot interpret."""

    def __init__(self, endpoint: str, expected: str) -> None:
        super().__init__(f'Unexpected response from {endpoint}: expected {expected}', 502)
        self.endpoint = endpoint
        self.expected = expected


class NetworkError(CustomBaseError):
    retriable = True

    def __init__(self, message: str, status_code: int = 503) -> None:
        super().__init__(message, status_code)


class RequestTimeoutError(NetworkError):
    def __init__(self, endpoint: str, timeout_seconds: float) -> None:
        super().__init__(
            f'Request to {endpoint} timed out after {timeout_seconds:g}s; '
            'the backend may be unreachable',
            504,
        )
        self.endpoint = endpoint


class BusinessRejectionError(DomainError):
    """Backend (or a local soft gate) refused the action. Never auto-retried."""

    def __init__(self, message: str, status_code: int = 409, *, terminal: bool = False) -> None:
        super().__init__(message, status_code)
        self.terminal = terminal


class SaleCreationFailedError(BusinessRejectionError):
    def __init__(self, message: str, status_code: int = 409) -> None:
        super().__init__(message, status_code)


class PaymentPartialFailureError(CustomBaseError):
    """The sale is committed but its initial payment did not register."""

    retriable = True

    def __init__(self, sale_id: int, cause: CustomBaseError) -> None:
        super().__init__(
            f'Sale {sale_id} created, but the payment failed ({cause.message}); '
            'retry the payment separately',
            207,
        )
        self.sale_id = sale_id
        self.cause = cause


class InconsistentReleaseError(CustomBaseError):
    def __init__(self, sale_id: int, still_claimed: list[int]) -> None:
        seats = ', '.join(f'{n:02d}' for n in still_claimed)
        super().__init__(
            f'Release of sale {sale_id} left seats {seats} claimed; reload and verify', 409
        )
        self.sale_id = sale_id
        self.still_claimed = still_claimed


class SubmissionInProgressError(CustomBaseError):
    def __init__(self, action: str) -> None:
        super().__init__(f'{action} is already being submitted', 429)
        self.action = action
