import uuid
from typing import Optional, List
from datetime import datetime, timezone
from sqlalchemy import select, insert, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from checkout_service.domain.models import (
    CatalogueSnapshot, OrderItemRecord, OrderRecord, OrderStatus, PaymentStatus, Product,
    CardPayment, CashPayment, DeliveryShipment, PickupShipment
)
from checkout_service.infrastructure.db_schema import (
    orders_tbl, products_tbl, payments_tbl, shipments_tbl, catalogue_stock_tbl
)
from checkout_service.application.interfaces import (
    OrderRepository, ProductRepository, PaymentRepository, ShipmentRepository, CatalogueRepository,
    PaymentObject, ShipmentObject
)


class SQLAlchemyOrderRepository(OrderRepository):
    # Поля, которые можно менять через update
    UPDATABLE_FIELDS = ("status", "cancellation", "payment_id", "shipment_id")

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        user_id: str,
        items: List[OrderItemRecord],
        payment_id: str,
        shipment_id: str,
        status: OrderStatus,
        cancellation: bool
    ) -> OrderRecord:
        record = OrderRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            order_date=datetime.now(timezone.utc),
            items=items,
            payment_id=payment_id,
            shipment_id=shipment_id,
            status=status,
            cancellation=cancellation
        )
        stmt = insert(orders_tbl).values(
            id=record.id,
            user_id=record.user_id,
            order_date=record.order_date,
            items=[item.model_dump() for item in record.items],
            payment_id=record.payment_id,
            shipment_id=record.shipment_id,
            status=record.status,
            cancellation=record.cancellation
        )
        await self._session.execute(stmt)
        return record

    async def get_by_id(self, order_id: str) -> Optional[OrderRecord]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def get_by_user_id(self, user_id: str) -> List[OrderRecord]:
        result = await self._session.execute(
            select(orders_tbl)
            .where(orders_tbl.c.user_id == user_id)
            .order_by(orders_tbl.c.order_date.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def update(self, order_id: str, data: dict) -> bool:
        values = {key: value for key, value in data.items() if key in self.UPDATABLE_FIELDS}
        if not values:
            return await self.get_by_id(order_id) is not None
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order_id)
            .values(**values)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, order_id: str) -> bool:
        result = await self._session.execute(
            delete(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        return result.rowcount > 0

    def _to_domain(self, row) -> OrderRecord:
        """Трансформация DB → Domain"""
        return OrderRecord(
            id=row.id,
            user_id=row.user_id,
            order_date=row.order_date,
            items=[OrderItemRecord(**item) for item in row.items],
            payment_id=row.payment_id,
            shipment_id=row.shipment_id,
            status=OrderStatus(row.status),
            cancellation=row.cancellation
        )


class SQLAlchemyProductRepository(ProductRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, product_id: str) -> Optional[Product]:
        result = await self._session.execute(
            select(products_tbl).where(products_tbl.c.id == product_id)
        )
        row = result.fetchone()
        if not row:
            return None
        return Product(id=row.id, name=row.name, price=row.price, category_id=row.category_id)


class SQLAlchemyPaymentRepository(PaymentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, payment_id: str) -> Optional[PaymentObject]:
        result = await self._session.execute(
            select(payments_tbl).where(payments_tbl.c.id == payment_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def store(self, payment: PaymentObject) -> PaymentObject:
        stored = payment.model_copy(update={"id": str(uuid.uuid4())})
        values = {
            "id": stored.id,
            "type": stored.type,
            "amount": stored.amount,
            "date": stored.date,
            "status": stored.status,
        }
        if isinstance(stored, CardPayment):
            values.update(
                card_number=stored.card_number,
                expiry_date=stored.expiry_date,
                payment_gateway=stored.payment_gateway
            )
        await self._session.execute(insert(payments_tbl).values(**values))
        return stored

    def _to_domain(self, row) -> PaymentObject:
        if row.type == "card":
            return CardPayment(
                id=row.id,
                amount=row.amount,
                date=row.date,
                status=PaymentStatus(row.status),
                card_number=row.card_number,
                expiry_date=row.expiry_date,
                payment_gateway=row.payment_gateway
            )
        return CashPayment(
            id=row.id,
            amount=row.amount,
            date=row.date,
            status=PaymentStatus(row.status)
        )


class SQLAlchemyShipmentRepository(ShipmentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, shipment_id: str) -> Optional[ShipmentObject]:
        result = await self._session.execute(
            select(shipments_tbl).where(shipments_tbl.c.id == shipment_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def store(self, shipment: ShipmentObject) -> ShipmentObject:
        stored = shipment.model_copy(update={"id": str(uuid.uuid4())})
        values = {"id": stored.id, "type": stored.type, "fee": stored.fee}
        if isinstance(stored, DeliveryShipment):
            values["address"] = stored.address
        else:
            values["pickup_location"] = stored.pickup_location
        await self._session.execute(insert(shipments_tbl).values(**values))
        return stored

    def _to_domain(self, row) -> ShipmentObject:
        if row.type == "delivery":
            return DeliveryShipment(id=row.id, fee=row.fee, address=row.address)
        return PickupShipment(id=row.id, fee=row.fee, pickup_location=row.pickup_location)


class SQLAlchemyCatalogueRepository(CatalogueRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_snapshot(self) -> CatalogueSnapshot:
        result = await self._session.execute(select(catalogue_stock_tbl))
        return CatalogueSnapshot(
            quantities={row.product_id: row.quantity for row in result.fetchall()}
        )

    async def update_quantity(self, product_id: str, new_quantity: int) -> None:
        stmt = (
            update(catalogue_stock_tbl)
            .where(catalogue_stock_tbl.c.product_id == product_id)
            .values(
                quantity=new_quantity,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)
