from sqlalchemy import (
    Table, Column, String, Integer, Numeric, Boolean, Enum, DateTime, JSON, MetaData, ForeignKey
)
from sqlalchemy.sql import func

from checkout_service.domain.models import OrderStatus, PaymentStatus

metadata = MetaData()


products_tbl = Table(
    "products",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("category_id", String, nullable=True)
)


catalogue_stock_tbl = Table(
    "catalogue_stock",
    metadata,
    Column("product_id", String, ForeignKey("products.id"), primary_key=True),
    Column("quantity", Integer, nullable=False, default=0),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


payments_tbl = Table(
    "payments",
    metadata,
    Column("id", String, primary_key=True),
    Column("type", String, nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("date", DateTime(timezone=True), nullable=False),
    Column("status", Enum(PaymentStatus), default=PaymentStatus.PENDING),
    Column("card_number", String, nullable=True),
    Column("expiry_date", DateTime(timezone=True), nullable=True),
    Column("payment_gateway", String, nullable=True)
)


shipments_tbl = Table(
    "shipments",
    metadata,
    Column("id", String, primary_key=True),
    Column("type", String, nullable=False),
    Column("fee", Numeric(12, 2), nullable=False, default=0),
    Column("address", String, nullable=True),
    Column("pickup_location", String, nullable=True)
)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, nullable=False, index=True),
    Column("order_date", DateTime(timezone=True), server_default=func.now()),
    Column("items", JSON, nullable=False),
    Column("payment_id", String, ForeignKey("payments.id"), nullable=True),
    Column("shipment_id", String, ForeignKey("shipments.id"), nullable=True),
    Column("status", Enum(OrderStatus), default=OrderStatus.PENDING),
    Column("cancellation", Boolean, nullable=False, default=False)
)
