import asyncio
import logging
from decimal import Decimal

from checkout_service.domain.models import Order, OrderItemRecord, OrderStatus, UserSession
from checkout_service.domain.builders import PaymentDetails, ShipmentDetails, build_payment, build_shipment
from checkout_service.domain.inventory import find_shortages, remaining_quantities
from checkout_service.domain.exceptions import (
    UnauthenticatedError, InvalidInputError, EmptyCartError, InsufficientStockError, UserNotFoundError
)
from checkout_service.application.interfaces import AccountsService, CartsService
from checkout_service.application.hydrate_order import OrderHydrator


logger = logging.getLogger(__name__)


class CheckoutUseCase:
    """Превращает корзину пользователя в сохраненный заказ.

    Шаги после начала записи не откатываются: если упадет сохранение платежа или заказа,
    уже сохраненные доставка и платеж останутся в базе; если упадет списание остатков
    или очистка корзины, заказ останется созданным.
    """

    def __init__(
        self,
        unit_of_work,
        accounts_service: AccountsService,
        carts_service: CartsService,
        default_payment_gateway: str,
        default_shipment_fees: dict[str, Decimal]
    ):
        self._uow = unit_of_work
        self._accounts = accounts_service
        self._carts = carts_service
        self._default_gateway = default_payment_gateway
        self._default_fees = default_shipment_fees
        self._hydrate = OrderHydrator(unit_of_work)

    async def __call__(
        self,
        session: UserSession,
        payment_details: PaymentDetails,
        shipment_details: ShipmentDetails
    ) -> Order:
        # 1. Авторизация
        if not session.is_authenticated:
            raise UnauthenticatedError("Пользователь не авторизован")

        # 2. Типы платежа и доставки обязательны
        if not payment_details.type or not shipment_details.type:
            raise InvalidInputError("Нужно указать тип платежа и тип доставки")

        logger.info(f"Оформление заказа для пользователя {session.user_id}")

        account = await self._accounts.get_account(session.user_id)
        if not account:
            raise UserNotFoundError(session.user_id)

        # 3. Корзина
        cart = await self._carts.get_cart(account.id)
        if not cart.items:
            raise EmptyCartError(f"Корзина пользователя {account.id} пуста")

        # 4. Остатки по свежему снимку каталога
        async with self._uow() as uow:
            snapshot = await uow.catalogue.get_snapshot()
        shortages = find_shortages(snapshot, cart.items)
        if shortages:
            logger.info(f"Недостаточно товара для пользователя {account.id}: {shortages}")
            raise InsufficientStockError(shortages)

        order = Order(user_id=account.id)
        for item in cart.items:
            order.add_item(item.product, item.quantity)

        shipment = build_shipment(shipment_details, account.address, self._default_fees)
        order.set_shipment(shipment)

        amount = cart.subtotal() + shipment.fee
        payment = build_payment(payment_details, amount, self._default_gateway)
        order.set_payment(payment)

        # Сначала доставка, потом платеж: заказу нужны оба id
        async with self._uow() as uow:
            stored_shipment = await uow.shipments.store(order.shipment)
            await uow.commit()
        logger.info(f"Доставка сохранена: {stored_shipment.id}")

        async with self._uow() as uow:
            stored_payment = await uow.payments.store(order.payment)
            await uow.commit()
        logger.info(f"Платеж сохранен: {stored_payment.id}, сумма {stored_payment.amount}")

        async with self._uow() as uow:
            record = await uow.orders.create(
                user_id=order.user_id,
                items=[
                    OrderItemRecord(product_id=item.product.id, quantity=item.quantity)
                    for item in order.items
                ],
                payment_id=stored_payment.id,
                shipment_id=stored_shipment.id,
                status=OrderStatus.PENDING,
                cancellation=False
            )
            await uow.commit()
        logger.info(f"Заказ создан: {record.id}")

        remaining = remaining_quantities(snapshot, order.items)
        await asyncio.gather(*(
            self._update_quantity(product_id, quantity)
            for product_id, quantity in remaining.items()
        ))
        logger.info(f"Остатки списаны для заказа {record.id}")

        await self._carts.empty(account.cart_id or cart.id)
        logger.info(f"Корзина пользователя {account.id} очищена")

        return await self._hydrate(record)

    async def _update_quantity(self, product_id: str, quantity: int) -> None:
        async with self._uow() as uow:
            await uow.catalogue.update_quantity(product_id, quantity)
            await uow.commit()
