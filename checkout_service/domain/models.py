from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from checkout_service.domain.exceptions import InvalidInputError, InvalidPaymentStateError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"
    SHIPPED = "Shipped"
    COMPLETED = "Completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    REFUNDED = "refunded"
    FAILED = "failed"


class Product(BaseModel):
    """Value Object: товар из каталога"""
    id: str
    name: str
    price: Decimal
    category_id: Optional[str] = None


class LineItem(BaseModel):
    product: Product
    quantity: int = Field(gt=0)

    @property
    def price(self) -> Decimal:
        return self.product.price * self.quantity


class _PaymentLifecycle(BaseModel, ABC):
    id: Optional[str] = None
    amount: Decimal
    date: datetime = Field(default_factory=utcnow)
    status: PaymentStatus = PaymentStatus.PENDING

    @abstractmethod
    def verify(self) -> bool:
        pass

    def process(self) -> None:
        """Бизнес-правило: провести можно только pending платеж"""
        if self.status != PaymentStatus.PENDING:
            raise InvalidPaymentStateError(f"Платеж нельзя провести (status: {self.status.value})")
        self.status = PaymentStatus.PROCESSED if self.verify() else PaymentStatus.FAILED

    def refund(self) -> None:
        """Бизнес-правило: вернуть можно только проведенный платеж"""
        if self.status != PaymentStatus.PROCESSED:
            raise InvalidPaymentStateError(f"Платеж нельзя вернуть (status: {self.status.value})")
        self.status = PaymentStatus.REFUNDED


class CardPayment(_PaymentLifecycle):
    type: Literal["card"] = "card"
    card_number: Optional[str] = None
    expiry_date: Optional[datetime] = None
    payment_gateway: Optional[str] = None

    def verify(self) -> bool:
        if not self.card_number or self.expiry_date is None:
            return False
        expiry = self.expiry_date
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return expiry > utcnow()


class CashPayment(_PaymentLifecycle):
    type: Literal["cash"] = "cash"

    def verify(self) -> bool:
        return self.amount >= 0


Payment = Annotated[Union[CardPayment, CashPayment], Field(discriminator="type")]


class DeliveryShipment(BaseModel):
    id: Optional[str] = None
    type: Literal["delivery"] = "delivery"
    fee: Decimal = Decimal("0")
    address: str


class PickupShipment(BaseModel):
    id: Optional[str] = None
    type: Literal["pickup"] = "pickup"
    fee: Decimal = Decimal("0")
    pickup_location: Optional[str] = None


Shipment = Annotated[Union[DeliveryShipment, PickupShipment], Field(discriminator="type")]


class Order(BaseModel):
    """Domain Entity: заказ. Цена заказа не хранится, а считается по текущим ценам товаров."""
    id: Optional[str] = None
    user_id: str
    order_date: datetime = Field(default_factory=utcnow)
    items: list[LineItem] = Field(default_factory=list)
    payment: Optional[Payment] = None
    shipment: Optional[Shipment] = None
    status: OrderStatus = OrderStatus.PENDING
    cancellation: bool = False

    def add_item(self, product: Product, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidInputError(f"Количество товара {product.id} должно быть больше нуля")
        self.items.append(LineItem(product=product, quantity=quantity))

    def set_payment(self, payment: Union[CardPayment, CashPayment]) -> None:
        self.payment = payment

    def set_shipment(self, shipment: Union[DeliveryShipment, PickupShipment]) -> None:
        self.shipment = shipment

    def total_price(self) -> Decimal:
        return sum((item.price for item in self.items), Decimal("0"))

    def verify(self) -> bool:
        """Бизнес-правило: чек можно выдать только для заказа с товарами, платежом и доставкой"""
        return bool(self.items) and self.payment is not None and self.shipment is not None


class OrderItemRecord(BaseModel):
    product_id: str
    quantity: int


class OrderRecord(BaseModel):
    """Заказ в том виде, в котором он лежит в хранилище"""
    id: str
    user_id: str
    order_date: datetime
    items: list[OrderItemRecord]
    payment_id: Optional[str] = None
    shipment_id: Optional[str] = None
    status: OrderStatus
    cancellation: bool = False


class CartItem(BaseModel):
    product: Product
    quantity: int


class Cart(BaseModel):
    id: str
    user_id: str
    items: list[CartItem] = Field(default_factory=list)

    def subtotal(self) -> Decimal:
        return sum((item.product.price * item.quantity for item in self.items), Decimal("0"))


class Account(BaseModel):
    id: str
    email: Optional[str] = None
    address: Optional[str] = None
    cart_id: Optional[str] = None


class UserSession(BaseModel):
    """Текущий пользователь; передается в use case явно"""
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


class CatalogueSnapshot(BaseModel):
    quantities: dict[str, int] = Field(default_factory=dict)

    def quantity_of(self, product_id: str) -> int:
        return self.quantities.get(product_id, 0)


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class ProductSnapshot(_Snapshot):
    id: str
    name: str
    price: Decimal
    category_id: Optional[str] = None


class UserSnapshot(_Snapshot):
    id: str
    email: Optional[str] = None
    address: Optional[str] = None


class PaymentSnapshot(_Snapshot):
    """Платеж в чеке: только данные, без process/refund"""
    id: Optional[str] = None
    type: str
    amount: Decimal
    date: datetime
    status: PaymentStatus
    card_number: Optional[str] = None
    expiry_date: Optional[datetime] = None
    payment_gateway: Optional[str] = None


class ShipmentSnapshot(_Snapshot):
    id: Optional[str] = None
    type: str
    fee: Decimal
    address: Optional[str] = None
    pickup_location: Optional[str] = None


class ReceiptLine(_Snapshot):
    product: ProductSnapshot
    quantity: int
    price: Decimal


class Receipt(_Snapshot):
    """Value Object: снимок заказа на момент выдачи чека"""
    order_id: str
    user: UserSnapshot
    items: tuple[ReceiptLine, ...]
    total: Decimal
    payment: PaymentSnapshot
    shipment: ShipmentSnapshot
    issued_at: datetime = Field(default_factory=utcnow)
