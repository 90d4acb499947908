from abc import ABC, abstractmethod
from typing import Optional, List, Union

from checkout_service.domain.models import (
    Account, Cart, CatalogueSnapshot, OrderItemRecord, OrderRecord, OrderStatus, Product,
    CardPayment, CashPayment, DeliveryShipment, PickupShipment
)

PaymentObject = Union[CardPayment, CashPayment]
ShipmentObject = Union[DeliveryShipment, PickupShipment]


class OrderRepository(ABC):
    @abstractmethod
    async def create(
        self,
        user_id: str,
        items: List[OrderItemRecord],
        payment_id: str,
        shipment_id: str,
        status: OrderStatus,
        cancellation: bool
    ) -> OrderRecord:
        pass

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[OrderRecord]:
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[OrderRecord]:
        pass

    @abstractmethod
    async def update(self, order_id: str, data: dict) -> bool:
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> bool:
        pass


class ProductRepository(ABC):
    @abstractmethod
    async def get(self, product_id: str) -> Optional[Product]:
        pass


class PaymentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[PaymentObject]:
        pass

    @abstractmethod
    async def store(self, payment: PaymentObject) -> PaymentObject:
        pass


class ShipmentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, shipment_id: str) -> Optional[ShipmentObject]:
        pass

    @abstractmethod
    async def store(self, shipment: ShipmentObject) -> ShipmentObject:
        pass


class CatalogueRepository(ABC):
    @abstractmethod
    async def get_snapshot(self) -> CatalogueSnapshot:
        pass

    @abstractmethod
    async def update_quantity(self, product_id: str, new_quantity: int) -> None:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @property
    @abstractmethod
    def products(self) -> ProductRepository:
        pass

    @property
    @abstractmethod
    def payments(self) -> PaymentRepository:
        pass

    @property
    @abstractmethod
    def shipments(self) -> ShipmentRepository:
        pass

    @property
    @abstractmethod
    def catalogue(self) -> CatalogueRepository:
        pass

    @abstractmethod
    async def __call__(self):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass


class AccountsService(ABC):
    @abstractmethod
    async def get_account(self, user_id: str) -> Optional[Account]:
        pass


class CartsService(ABC):
    @abstractmethod
    async def get_cart(self, user_id: str) -> Cart:
        pass

    @abstractmethod
    async def empty(self, cart_id: str) -> None:
        pass
