"""Operation State Enum"""

from enum import StrEnum


class OperationState(StrEnum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'
    PARTIAL_SUCCESS = 'partial_success'
    FAILED = 'failed'
