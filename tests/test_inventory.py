from decimal import Decimal

from checkout_service.domain.inventory import find_shortages, is_available, remaining_quantities
from checkout_service.domain.models import CartItem, CatalogueSnapshot, LineItem, Product

A = Product(id="A", name="A", price=Decimal("10"))
B = Product(id="B", name="B", price=Decimal("5"))


def test_available_when_every_request_fits():
    snapshot = CatalogueSnapshot(quantities={"A": 5, "B": 5})
    requests = [CartItem(product=A, quantity=5), CartItem(product=B, quantity=1)]
    assert find_shortages(snapshot, requests) == []
    assert is_available(snapshot, requests)


def test_shortage_names_offending_products():
    snapshot = CatalogueSnapshot(quantities={"A": 1, "B": 0})
    requests = [CartItem(product=A, quantity=2), CartItem(product=B, quantity=1)]
    assert find_shortages(snapshot, requests) == ["A", "B"]
    assert not is_available(snapshot, requests)


def test_unknown_product_has_zero_stock():
    snapshot = CatalogueSnapshot(quantities={"A": 10})
    assert find_shortages(snapshot, [CartItem(product=B, quantity=1)]) == ["B"]


def test_repeated_product_lines_are_summed():
    snapshot = CatalogueSnapshot(quantities={"A": 3})
    requests = [CartItem(product=A, quantity=2), CartItem(product=A, quantity=2)]
    assert find_shortages(snapshot, requests) == ["A"]


def test_remaining_quantities_one_per_product():
    snapshot = CatalogueSnapshot(quantities={"A": 5, "B": 5})
    items = [
        LineItem(product=A, quantity=2),
        LineItem(product=B, quantity=1),
        LineItem(product=A, quantity=1),
    ]
    assert remaining_quantities(snapshot, items) == {"A": 2, "B": 4}
