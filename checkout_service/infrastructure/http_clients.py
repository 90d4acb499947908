import httpx
import logging
from typing import Optional

from checkout_service.domain.models import Account, Cart
from checkout_service.domain.exceptions import AccountsServiceError, CartsServiceError
from checkout_service.application.interfaces import AccountsService, CartsService

logger = logging.getLogger(__name__)


class HTTPAccountsClient(AccountsService):
    def __init__(self, base_url: str, api_token: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url
        self._api_token = api_token
        self._transport = transport

    async def get_account(self, user_id: str) -> Optional[Account]:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    f"{self._base_url}/api/accounts/{user_id}",
                    headers={"X-API-Key": self._api_token},
                    timeout=10.0
                )

                if response.status_code == 200:
                    return Account(**response.json())
                elif response.status_code == 404:
                    return None
                else:
                    raise AccountsServiceError(f"Accounts service ошибка: {response.status_code}")

        except httpx.RequestError as e:
            logger.error(f"Accounts service ошибка подключения: {e}")
            raise AccountsServiceError(f"Accounts service не доступен: {str(e)}")


class HTTPCartsClient(CartsService):
    def __init__(self, base_url: str, api_token: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url
        self._api_token = api_token
        self._transport = transport

    async def get_cart(self, user_id: str) -> Cart:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    f"{self._base_url}/api/carts/{user_id}",
                    headers={"X-API-Key": self._api_token},
                    timeout=10.0
                )

                if response.status_code == 200:
                    return Cart(**response.json())
                elif response.status_code == 404:
                    # Корзины еще нет, считаем ее пустой
                    logger.info(f"Корзина пользователя {user_id} не найдена")
                    return Cart(id="", user_id=user_id)
                else:
                    raise CartsServiceError(f"Carts service ошибка: {response.status_code}")

        except httpx.RequestError as e:
            logger.error(f"Carts service ошибка подключения: {e}")
            raise CartsServiceError(f"Carts service не доступен: {str(e)}")

    async def empty(self, cart_id: str) -> None:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.delete(
                    f"{self._base_url}/api/carts/{cart_id}/items",
                    headers={"X-API-Key": self._api_token},
                    timeout=10.0
                )

                if response.status_code not in (200, 204):
                    raise CartsServiceError(f"Carts service ошибка: {response.status_code}")

        except httpx.RequestError as e:
            logger.error(f"Carts service ошибка подключения: {e}")
            raise CartsServiceError(f"Carts service не доступен: {str(e)}")
