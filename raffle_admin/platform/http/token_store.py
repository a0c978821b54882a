"""Bearer token holder used to gate backend requests."""

from typing import Callable, Optional

from raffle_admin.platform.logging.loguru_io import Logger


class TokenStore:
    """
    In-memory credential slot.

    `clear()` is the forced-logout path: it drops the token and notifies every
    registered listener (e.g. to route the operator back to the login surface).
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token.strip() if token and token.strip() else None
        self._logout_listeners: list[Callable[[], None]] = []

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def on_logout(self, listener: Callable[[], None]) -> None:
        self._logout_listeners.append(listener)

    def auth_headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {'Authorization': f'Bearer {self._token}'}

    def clear(self) -> None:
        self._token = None
        Logger.base.warning('🔒 [AUTH] Credentials cleared, forcing logout')
        for listener in self._logout_listeners:
            listener()
