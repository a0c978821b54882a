"""
Backend API Client

Thin async wrapper over httpx that owns the error mapping every gateway relies on:

- timeout                 → RequestTimeoutError (retriable)
- connection failure      → NetworkError (retriable)
- 401                     → AuthenticationError (token store cleared first)
- 404                     → NotFoundError
- other 4xx               → BusinessRejectionError with the backend `detail`
- 5xx                     → NetworkError (retriable)
- 2xx with non-JSON body  → UnexpectedShapeError
"""

from types import TracebackType
from typing import Any, Mapping, Optional, Self

import httpx
import orjson

from raffle_admin.platform.exception.exceptions import (
    AuthenticationError,
    BusinessRejectionError,
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    UnexpectedShapeError,
)
from raffle_admin.platform.http.token_store import TokenStore
from raffle_admin.platform.logging.loguru_io import Logger


def _extract_detail(response: httpx.Response) -> Optional[str]:
    try:
        body = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.text.strip() or None

    if isinstance(body, dict):
        detail = body.get('detail') or body.get('message') or body.get('error')
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            # FastAPI validation errors: [{"loc": [...], "msg": "..."}]
            first = detail[0]
            if isinstance(first, dict) and isinstance(first.get('msg'), str):
                return first['msg']
    return None


class ApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        token_store: TokenStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._token_store = token_store
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        response = await self._request('GET', path, params=params)
        return self._decode_json(path, response)

    async def post_json(self, path: str, payload: Any) -> Any:
        response = await self._request('POST', path, json=payload)
        return self._decode_json(path, response, allow_empty=True)

    async def put_json(self, path: str, payload: Any) -> Any:
        response = await self._request('PUT', path, json=payload)
        return self._decode_json(path, response, allow_empty=True)

    async def get_bytes(self, path: str) -> bytes:
        response = await self._request('GET', path)
        return response.content

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = self._token_store.auth_headers()
        if 'json' in kwargs:
            headers['Content-Type'] = 'application/json'
            kwargs['content'] = orjson.dumps(kwargs.pop('json'))

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            Logger.base.warning(f'⏱️ [HTTP] {method} {path} timed out: {e}')
            raise RequestTimeoutError(path, self._timeout_seconds) from e
        except httpx.TransportError as e:
            Logger.base.warning(f'⚠️ [HTTP] {method} {path} transport error: {e}')
            raise NetworkError(f'Could not reach the backend ({path}): {e}') from e

        Logger.base.debug(f'🌐 [HTTP] {method} {path} -> {response.status_code}')
        if response.is_success:
            return response

        detail = _extract_detail(response)
        status = response.status_code
        if status == 401:
            self._token_store.clear()
            raise AuthenticationError(detail or 'Session expired, please log in again')
        if status == 404:
            raise NotFoundError(detail or f'Not found: {path}')
        if status >= 500:
            raise NetworkError(detail or f'HTTP {status} from {path}', status)
        raise BusinessRejectionError(detail or f'HTTP {status}', status)

    @staticmethod
    def _decode_json(path: str, response: httpx.Response, *, allow_empty: bool = False) -> Any:
        if not response.content:
            if allow_empty:
                return None
            raise UnexpectedShapeError(path, 'a JSON body')
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise UnexpectedShapeError(path, 'a JSON body') from e
