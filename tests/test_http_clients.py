import httpx
import pytest

from checkout_service.domain.exceptions import AccountsServiceError, CartsServiceError
from checkout_service.infrastructure.http_clients import HTTPAccountsClient, HTTPCartsClient


def _transport(handler):
    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_get_account():
    def handler(request):
        assert request.url.path == "/api/accounts/U"
        assert request.headers["X-API-Key"] == "token"
        return httpx.Response(200, json={"id": "U", "address": "1 Main St", "cart_id": "cart-U"})

    client = HTTPAccountsClient("http://accounts", "token", transport=_transport(handler))
    account = await client.get_account("U")

    assert account.id == "U"
    assert account.address == "1 Main St"
    assert account.cart_id == "cart-U"


@pytest.mark.asyncio
async def test_get_account_not_found():
    client = HTTPAccountsClient("http://accounts", "token", transport=_transport(lambda r: httpx.Response(404)))
    assert await client.get_account("U") is None


@pytest.mark.asyncio
async def test_get_account_server_error():
    client = HTTPAccountsClient("http://accounts", "token", transport=_transport(lambda r: httpx.Response(500)))
    with pytest.raises(AccountsServiceError):
        await client.get_account("U")


@pytest.mark.asyncio
async def test_get_account_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = HTTPAccountsClient("http://accounts", "token", transport=_transport(handler))
    with pytest.raises(AccountsServiceError):
        await client.get_account("U")


@pytest.mark.asyncio
async def test_get_cart():
    payload = {
        "id": "cart-U",
        "user_id": "U",
        "items": [
            {"product": {"id": "A", "name": "Product A", "price": "10"}, "quantity": 2},
            {"product": {"id": "B", "name": "Product B", "price": "5"}, "quantity": 1},
        ],
    }
    client = HTTPCartsClient("http://carts", "token", transport=_transport(lambda r: httpx.Response(200, json=payload)))
    cart = await client.get_cart("U")

    assert cart.id == "cart-U"
    assert len(cart.items) == 2
    assert str(cart.subtotal()) == "25"


@pytest.mark.asyncio
async def test_missing_cart_is_empty():
    client = HTTPCartsClient("http://carts", "token", transport=_transport(lambda r: httpx.Response(404)))
    cart = await client.get_cart("U")
    assert cart.items == []


@pytest.mark.asyncio
async def test_empty_cart():
    calls = []

    def handler(request):
        calls.append((request.method, request.url.path))
        return httpx.Response(204)

    client = HTTPCartsClient("http://carts", "token", transport=_transport(handler))
    await client.empty("cart-U")
    assert calls == [("DELETE", "/api/carts/cart-U/items")]


@pytest.mark.asyncio
async def test_empty_cart_error():
    client = HTTPCartsClient("http://carts", "token", transport=_transport(lambda r: httpx.Response(502)))
    with pytest.raises(CartsServiceError):
        await client.empty("cart-U")
