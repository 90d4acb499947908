import asyncio

from checkout_service.domain.models import Order
from checkout_service.domain.exceptions import OrderNotFoundError
from checkout_service.application.hydrate_order import OrderHydrator


class GetOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work
        self._hydrate = OrderHydrator(unit_of_work)

    async def __call__(self, order_id: str) -> Order:
        async with self._uow() as uow:
            record = await uow.orders.get_by_id(order_id)
        if not record:
            raise OrderNotFoundError(f"Заказ {order_id} не найден")
        return await self._hydrate(record)


class GetUserOrdersUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work
        self._hydrate = OrderHydrator(unit_of_work)

    async def __call__(self, user_id: str) -> list[Order]:
        async with self._uow() as uow:
            records = await uow.orders.get_by_user_id(user_id)
        return list(await asyncio.gather(*(self._hydrate(record) for record in records)))
