"""Проверка остатков по снимку каталога.

Проверка и последующее списание не атомарны: два checkout, прочитавшие один и тот же
снимок, оба пройдут проверку и вместе могут продать больше, чем есть на складе.
"""
from typing import Iterable

from checkout_service.domain.models import CatalogueSnapshot, CartItem, LineItem


def find_shortages(snapshot: CatalogueSnapshot, requests: Iterable[CartItem | LineItem]) -> list[str]:
    """Возвращает id товаров, которых в снимке меньше, чем запрошено"""
    requested: dict[str, int] = {}
    for item in requests:
        requested[item.product.id] = requested.get(item.product.id, 0) + item.quantity

    return [
        product_id
        for product_id, quantity in requested.items()
        if quantity > snapshot.quantity_of(product_id)
    ]


def is_available(snapshot: CatalogueSnapshot, requests: Iterable[CartItem | LineItem]) -> bool:
    return not find_shortages(snapshot, requests)


def remaining_quantities(snapshot: CatalogueSnapshot, items: Iterable[LineItem]) -> dict[str, int]:
    """Новые остатки: количество в снимке минус заказанное"""
    remaining: dict[str, int] = {}
    for item in items:
        current = remaining.get(item.product.id, snapshot.quantity_of(item.product.id))
        remaining[item.product.id] = current - item.quantity
    return remaining
