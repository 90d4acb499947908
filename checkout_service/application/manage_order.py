import logging
from typing import Optional
from pydantic import BaseModel

from checkout_service.domain.models import OrderStatus
from checkout_service.domain.exceptions import OrderNotFoundError, InvalidInputError

logger = logging.getLogger(__name__)


class UpdateOrderDTO(BaseModel):
    status: Optional[OrderStatus] = None
    cancellation: Optional[bool] = None


class UpdateOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: str, dto: UpdateOrderDTO) -> None:
        data = dto.model_dump(exclude_none=True)
        if not data:
            raise InvalidInputError("Нет полей для обновления")

        async with self._uow() as uow:
            updated = await uow.orders.update(order_id, data)
            if not updated:
                raise OrderNotFoundError(f"Заказ {order_id} не найден")
            await uow.commit()
        logger.info(f"Заказ {order_id} обновлен: {data}")


class DeleteOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> None:
        async with self._uow() as uow:
            deleted = await uow.orders.delete(order_id)
            if not deleted:
                raise OrderNotFoundError(f"Заказ {order_id} не найден")
            await uow.commit()
        logger.info(f"Заказ {order_id} удален")
