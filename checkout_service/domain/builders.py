from datetime import datetime
from decimal import Decimal
from typing import Optional, Union
from pydantic import BaseModel

from checkout_service.domain.exceptions import InvalidInputError
from checkout_service.domain.models import (
    CardPayment, CashPayment, DeliveryShipment, PickupShipment, utcnow
)

PAYMENT_TYPES = ("card", "cash")
SHIPMENT_TYPES = ("delivery", "pickup")


class PaymentDetails(BaseModel):
    """Частично заполненные пользователем данные платежа"""
    type: Optional[str] = None
    amount: Optional[Decimal] = None
    card_number: Optional[str] = None
    expiry_date: Optional[datetime] = None
    payment_gateway: Optional[str] = None


class ShipmentDetails(BaseModel):
    """Частично заполненные пользователем данные доставки"""
    type: Optional[str] = None
    fee: Optional[Decimal] = None
    address: Optional[str] = None
    pickup_location: Optional[str] = None


def build_shipment(
    details: ShipmentDetails,
    default_address: Optional[str],
    default_fees: dict[str, Decimal],
) -> Union[DeliveryShipment, PickupShipment]:
    """Собирает несохраненную доставку. Адрес по умолчанию берется из аккаунта."""
    if not details.type:
        raise InvalidInputError("Не указан тип доставки")
    if details.type not in SHIPMENT_TYPES:
        raise InvalidInputError(f"Неизвестный тип доставки: {details.type}")

    fee = details.fee if details.fee is not None else default_fees.get(details.type, Decimal("0"))

    if details.type == "delivery":
        address = details.address or default_address
        if not address:
            raise InvalidInputError("Не указан адрес доставки и у пользователя нет адреса по умолчанию")
        return DeliveryShipment(fee=fee, address=address)

    return PickupShipment(fee=fee, pickup_location=details.pickup_location)


def build_payment(
    details: PaymentDetails,
    amount: Decimal,
    default_gateway: str,
    now: Optional[datetime] = None,
) -> Union[CardPayment, CashPayment]:
    """Собирает несохраненный платеж. Сумма всегда считается вызывающим, details.amount игнорируется."""
    if not details.type:
        raise InvalidInputError("Не указан тип платежа")
    if details.type not in PAYMENT_TYPES:
        raise InvalidInputError(f"Неизвестный тип платежа: {details.type}")

    now = now or utcnow()

    if details.type == "card":
        return CardPayment(
            amount=amount,
            date=now,
            card_number=details.card_number,
            # FIXME: без expiry_date карта получает текущее время и сразу считается просроченной
            expiry_date=details.expiry_date or now,
            payment_gateway=details.payment_gateway or default_gateway,
        )

    return CashPayment(amount=amount, date=now)
