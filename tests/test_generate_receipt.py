from decimal import Decimal

import pytest
from pydantic import ValidationError

from checkout_service.application.generate_receipt import GenerateReceiptUseCase
from checkout_service.domain.exceptions import InvalidOrderError, UserNotFoundError
from checkout_service.domain.models import (
    CashPayment,
    DeliveryShipment,
    Order,
    PaymentStatus,
)


@pytest.fixture
def order(product_a, product_b):
    order = Order(id="order-1", user_id="U")
    order.add_item(product_a, 2)
    order.add_item(product_b, 1)
    order.set_payment(CashPayment(id="pay-1", amount=Decimal("28")))
    order.set_shipment(DeliveryShipment(id="ship-1", fee=Decimal("3"), address="1 Main St"))
    return order


@pytest.mark.asyncio
async def test_receipt_totals(order, accounts):
    receipt = await GenerateReceiptUseCase(accounts)(order)

    assert receipt.order_id == "order-1"
    assert receipt.user.id == "U"
    assert [line.price for line in receipt.items] == [Decimal("20"), Decimal("5")]
    assert receipt.total == order.total_price() == Decimal("25")
    assert receipt.payment.id == "pay-1"
    assert receipt.shipment.id == "ship-1"


@pytest.mark.asyncio
async def test_receipt_uses_price_at_generation_time(order, accounts, product_a):
    product_a.price = Decimal("11")
    receipt = await GenerateReceiptUseCase(accounts)(order)

    assert receipt.items[0].price == Decimal("22")
    assert receipt.total == Decimal("27")


@pytest.mark.asyncio
async def test_receipt_is_a_snapshot(order, accounts, user, product_a):
    receipt = await GenerateReceiptUseCase(accounts)(order)

    product_a.price = Decimal("100")
    user.address = "moved"
    order.add_item(product_a, 1)

    assert receipt.items[0].product.price == Decimal("10")
    assert receipt.user.address == "1 Main St"
    assert len(receipt.items) == 2
    assert receipt.total == Decimal("25")


@pytest.mark.asyncio
async def test_receipt_is_immutable(order, accounts):
    receipt = await GenerateReceiptUseCase(accounts)(order)
    with pytest.raises(ValidationError):
        receipt.total = Decimal("0")


@pytest.mark.asyncio
async def test_receipt_nested_values_are_immutable(order, accounts):
    receipt = await GenerateReceiptUseCase(accounts)(order)

    with pytest.raises(ValidationError):
        receipt.items[0].product.price = Decimal("0")
    with pytest.raises(ValidationError):
        receipt.user.address = "elsewhere"
    with pytest.raises(ValidationError):
        receipt.shipment.address = "elsewhere"
    with pytest.raises(ValidationError):
        receipt.payment.status = PaymentStatus.REFUNDED


@pytest.mark.asyncio
async def test_receipt_payment_has_no_lifecycle(order, accounts):
    receipt = await GenerateReceiptUseCase(accounts)(order)

    assert not hasattr(receipt.payment, "process")
    assert not hasattr(receipt.payment, "refund")
    assert receipt.payment.status == PaymentStatus.PENDING
    assert order.payment.status == PaymentStatus.PENDING


@pytest.mark.asyncio
async def test_receipt_does_not_touch_order(order, accounts):
    before = order.model_dump()
    await GenerateReceiptUseCase(accounts)(order)
    assert order.model_dump() == before


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["payment", "shipment", "items"])
async def test_invalid_order(order, accounts, missing):
    if missing == "items":
        order.items = []
    else:
        setattr(order, missing, None)

    with pytest.raises(InvalidOrderError):
        await GenerateReceiptUseCase(accounts)(order)


@pytest.mark.asyncio
async def test_unknown_user(order, accounts):
    accounts.accounts.clear()
    with pytest.raises(UserNotFoundError):
        await GenerateReceiptUseCase(accounts)(order)
