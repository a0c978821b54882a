from typing import Awaitable, Callable, TypeVar

import anyio

from raffle_admin.platform.exception.exceptions import CustomBaseError
from raffle_admin.platform.logging.loguru_io import Logger


_T = TypeVar('_T')


async def retry_async(
    operation: Callable[[], Awaitable[_T]],
    *,
    attempts: int,
    backoff_seconds: float,
    label: str,
) -> _T:
    """
    Run `operation` up to `attempts` times, sleeping `backoff_seconds * attempt`
    between tries. Only errors flagged `retriable` are retried; everything else
    (auth, business rejections, malformed payloads) propagates on first sight.
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except CustomBaseError as e:
            if not e.retriable or attempt >= attempts:
                raise
            Logger.base.warning(f'🔁 [RETRY] {label} attempt {attempt}/{attempts} failed: {e}')
            await anyio.sleep(backoff_seconds * attempt)
            attempt += 1
