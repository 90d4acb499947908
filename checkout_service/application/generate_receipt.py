import logging

from checkout_service.domain.models import (
    Order, Receipt, ReceiptLine, ProductSnapshot, UserSnapshot, PaymentSnapshot, ShipmentSnapshot
)
from checkout_service.domain.exceptions import InvalidOrderError, UserNotFoundError
from checkout_service.application.interfaces import AccountsService


logger = logging.getLogger(__name__)


class GenerateReceiptUseCase:
    def __init__(self, accounts_service: AccountsService):
        self._accounts = accounts_service

    async def __call__(self, order: Order) -> Receipt:
        if not order.verify() or order.id is None:
            raise InvalidOrderError(f"Заказ {order.id} не прошел проверку")

        user = await self._accounts.get_account(order.user_id)
        if not user:
            raise UserNotFoundError(order.user_id)

        # Цены считаются на момент выдачи чека; в чек кладутся неизменяемые копии
        lines = tuple(
            ReceiptLine(
                product=ProductSnapshot(**item.product.model_dump()),
                quantity=item.quantity,
                price=item.product.price * item.quantity
            )
            for item in order.items
        )
        receipt = Receipt(
            order_id=order.id,
            user=UserSnapshot(**user.model_dump()),
            items=lines,
            total=order.total_price(),
            payment=PaymentSnapshot(**order.payment.model_dump()),
            shipment=ShipmentSnapshot(**order.shipment.model_dump())
        )
        logger.info(f"Чек для заказа {order.id} сформирован, сумма {receipt.total}")
        return receipt
