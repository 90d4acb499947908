from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Optional

from checkout_service.domain.models import OrderStatus, PaymentStatus


class PaymentDetailsRequest(BaseModel):
    type: Optional[str] = None
    amount: Optional[Decimal] = None
    card_number: Optional[str] = None
    expiry_date: Optional[datetime] = None
    payment_gateway: Optional[str] = None


class ShipmentDetailsRequest(BaseModel):
    type: Optional[str] = None
    fee: Optional[Decimal] = None
    address: Optional[str] = None
    pickup_location: Optional[str] = None


class CheckoutRequest(BaseModel):
    payment: PaymentDetailsRequest
    shipment: ShipmentDetailsRequest


class UpdateOrderRequest(BaseModel):
    status: Optional[OrderStatus] = None
    cancellation: Optional[bool] = None


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    price: Decimal


class PaymentResponse(BaseModel):
    id: Optional[str] = None
    type: str
    amount: Decimal
    status: PaymentStatus
    payment_gateway: Optional[str] = None

    @classmethod
    def from_domain(cls, payment):
        return cls(
            id=payment.id,
            type=payment.type,
            amount=payment.amount,
            status=payment.status,
            payment_gateway=getattr(payment, "payment_gateway", None)
        )


class ShipmentResponse(BaseModel):
    id: Optional[str] = None
    type: str
    fee: Decimal
    address: Optional[str] = None
    pickup_location: Optional[str] = None

    @classmethod
    def from_domain(cls, shipment):
        return cls(
            id=shipment.id,
            type=shipment.type,
            fee=shipment.fee,
            address=getattr(shipment, "address", None),
            pickup_location=getattr(shipment, "pickup_location", None)
        )


class OrderResponse(BaseModel):
    id: str
    user_id: str
    order_date: datetime
    items: list[OrderItemResponse]
    total_price: Decimal
    payment: Optional[PaymentResponse] = None
    shipment: Optional[ShipmentResponse] = None
    status: OrderStatus
    cancellation: bool

    @classmethod
    def from_domain(cls, order):
        return cls(
            id=order.id,
            user_id=order.user_id,
            order_date=order.order_date,
            items=[
                OrderItemResponse(
                    product_id=item.product.id,
                    name=item.product.name,
                    quantity=item.quantity,
                    price=item.price
                )
                for item in order.items
            ],
            total_price=order.total_price(),
            payment=PaymentResponse.from_domain(order.payment) if order.payment else None,
            shipment=ShipmentResponse.from_domain(order.shipment) if order.shipment else None,
            status=order.status,
            cancellation=order.cancellation
        )


class ReceiptResponse(BaseModel):
    order_id: str
    user_id: str
    items: list[OrderItemResponse]
    total: Decimal
    payment: PaymentResponse
    shipment: ShipmentResponse
    issued_at: datetime

    @classmethod
    def from_domain(cls, receipt):
        return cls(
            order_id=receipt.order_id,
            user_id=receipt.user.id,
            items=[
                OrderItemResponse(
                    product_id=line.product.id,
                    name=line.product.name,
                    quantity=line.quantity,
                    price=line.price
                )
                for line in receipt.items
            ],
            total=receipt.total,
            payment=PaymentResponse.from_domain(receipt.payment),
            shipment=ShipmentResponse.from_domain(receipt.shipment),
            issued_at=receipt.issued_at
        )


class ErrorResponse(BaseModel):
    detail: str
