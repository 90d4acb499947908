import asyncio
import logging

from checkout_service.domain.models import Order, OrderRecord, OrderItemRecord, LineItem
from checkout_service.domain.exceptions import ProductNotFoundError


logger = logging.getLogger(__name__)


class OrderHydrator:
    """Собирает доменный Order из записи хранилища: товары, платеж, доставка"""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, record: OrderRecord) -> Order:
        # Товары грузим параллельно, каждый в своей сессии
        items = await asyncio.gather(*(self._load_item(item) for item in record.items))

        async with self._uow() as uow:
            payment = await uow.payments.get_by_id(record.payment_id) if record.payment_id else None
            shipment = await uow.shipments.get_by_id(record.shipment_id) if record.shipment_id else None

        if payment is None:
            logger.warning(f"Платеж {record.payment_id} для заказа {record.id} не найден")
        if shipment is None:
            logger.warning(f"Доставка {record.shipment_id} для заказа {record.id} не найдена")

        return Order(
            id=record.id,
            user_id=record.user_id,
            order_date=record.order_date,
            items=list(items),
            payment=payment,
            shipment=shipment,
            status=record.status,
            cancellation=record.cancellation
        )

    async def _load_item(self, item: OrderItemRecord) -> LineItem:
        async with self._uow() as uow:
            product = await uow.products.get(item.product_id)
        if not product:
            raise ProductNotFoundError(item.product_id)
        return LineItem(product=product, quantity=item.quantity)
