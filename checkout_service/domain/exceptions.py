class DomainException(Exception):
    pass


class UnauthenticatedError(DomainException):
    pass


class InvalidInputError(DomainException):
    pass


class EmptyCartError(DomainException):
    pass


class InsufficientStockError(DomainException):
    def __init__(self, product_ids: list[str]):
        self.product_ids = list(product_ids)
        super().__init__(f"Недостаточно товара: {', '.join(self.product_ids)}")


class ProductNotFoundError(DomainException):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Товар {product_id} не найден")


class UserNotFoundError(DomainException):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Пользователь {user_id} не найден")


class InvalidOrderError(DomainException):
    pass


class OrderNotFoundError(DomainException):
    pass


class InvalidPaymentStateError(DomainException):
    pass


class AccountsServiceError(DomainException):
    pass


class CartsServiceError(DomainException):
    pass
