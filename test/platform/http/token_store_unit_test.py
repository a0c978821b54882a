import pytest

from raffle_admin.platform.http.token_store import TokenStore


@pytest.mark.unit
class TestTokenStore:
    def test_blank_token_is_unauthenticated(self) -> None:
        store = TokenStore('   ')

        assert not store.is_authenticated
        assert store.auth_headers() == {}

    def test_token_enables_bearer_header(self) -> None:
        store = TokenStore(' abc ')

        assert store.is_authenticated
        assert store.auth_headers() == {'Authorization': 'Bearer abc'}

    def test_clear_notifies_listeners(self) -> None:
        store = TokenStore('abc')
        calls: list[str] = []
        store.on_logout(lambda: calls.append('logout'))

        store.clear()

        assert store.token is None
        assert calls == ['logout']
