from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, status

from checkout_service.database import AsyncSessionLocal
from checkout_service.presentation.schemas import (
    CheckoutRequest, OrderResponse, ReceiptResponse, UpdateOrderRequest, ErrorResponse
)
from checkout_service.application.checkout import CheckoutUseCase
from checkout_service.application.generate_receipt import GenerateReceiptUseCase
from checkout_service.application.get_order import GetOrderUseCase, GetUserOrdersUseCase
from checkout_service.application.manage_order import (
    UpdateOrderUseCase, DeleteOrderUseCase, UpdateOrderDTO
)
from checkout_service.domain.builders import PaymentDetails, ShipmentDetails
from checkout_service.domain.models import UserSession
from checkout_service.domain.exceptions import (
    UnauthenticatedError, InvalidInputError, EmptyCartError, InsufficientStockError,
    ProductNotFoundError, UserNotFoundError, InvalidOrderError, OrderNotFoundError,
    AccountsServiceError, CartsServiceError
)
from checkout_service.infrastructure.unit_of_work import UnitOfWork
from checkout_service.infrastructure.http_clients import HTTPAccountsClient, HTTPCartsClient
from checkout_service.config import settings

router = APIRouter()


# Фабрики для создания use cases
def get_unit_of_work():
    return UnitOfWork(AsyncSessionLocal)


def get_accounts_service():
    return HTTPAccountsClient(settings.ACCOUNTS_BASE_URL, settings.API_TOKEN)


def get_carts_service():
    return HTTPCartsClient(settings.CARTS_BASE_URL, settings.API_TOKEN)


def get_user_session(x_user_id: Optional[str] = Header(default=None)) -> UserSession:
    return UserSession(user_id=x_user_id)


def get_checkout_use_case(
    uow=Depends(get_unit_of_work),
    accounts=Depends(get_accounts_service),
    carts=Depends(get_carts_service)
):
    return CheckoutUseCase(
        uow, accounts, carts, settings.DEFAULT_PAYMENT_GATEWAY, settings.SHIPMENT_FEES
    )


def get_get_order_use_case(uow=Depends(get_unit_of_work)):
    return GetOrderUseCase(uow)


def get_user_orders_use_case(uow=Depends(get_unit_of_work)):
    return GetUserOrdersUseCase(uow)


def get_update_order_use_case(uow=Depends(get_unit_of_work)):
    return UpdateOrderUseCase(uow)


def get_delete_order_use_case(uow=Depends(get_unit_of_work)):
    return DeleteOrderUseCase(uow)


def get_receipt_use_case(accounts=Depends(get_accounts_service)):
    return GenerateReceiptUseCase(accounts)


@router.post(
    "/checkout",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 404: {"model": ErrorResponse},
        409: {"model": ErrorResponse}, 503: {"model": ErrorResponse}
    },
    status_code=status.HTTP_201_CREATED
)
async def checkout(
    request: CheckoutRequest,
    session: UserSession = Depends(get_user_session),
    use_case: CheckoutUseCase = Depends(get_checkout_use_case)
):
    """Оформить заказ из корзины текущего пользователя"""
    try:
        order = await use_case(
            session,
            PaymentDetails(**request.payment.model_dump()),
            ShipmentDetails(**request.shipment.model_dump())
        )
        return OrderResponse.from_domain(order)

    except UnauthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except (InvalidInputError, EmptyCartError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InsufficientStockError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (UserNotFoundError, ProductNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (AccountsServiceError, CartsServiceError) as e:
        raise HTTPException(status_code=503, detail=f"Service unavailable: {str(e)}")


@router.get(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_order(
    order_id: str,
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """Получить заказ по ID"""
    try:
        order = await use_case(order_id)
        return OrderResponse.from_domain(order)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Заказ не найден")
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/users/{user_id}/orders", response_model=list[OrderResponse])
async def get_user_orders(
    user_id: str,
    use_case: GetUserOrdersUseCase = Depends(get_user_orders_use_case)
):
    """Заказы пользователя"""
    try:
        orders = await use_case(user_id)
        return [OrderResponse.from_domain(order) for order in orders]
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_order(
    order_id: str,
    request: UpdateOrderRequest,
    update_use_case: UpdateOrderUseCase = Depends(get_update_order_use_case),
    get_use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """Частичное обновление заказа (статус, отмена)"""
    try:
        await update_use_case(order_id, UpdateOrderDTO(**request.model_dump()))
        order = await get_use_case(order_id)
        return OrderResponse.from_domain(order)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Заказ не найден")


@router.delete(
    "/orders/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}}
)
async def delete_order(
    order_id: str,
    use_case: DeleteOrderUseCase = Depends(get_delete_order_use_case)
):
    """Удалить заказ"""
    try:
        await use_case(order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Заказ не найден")


@router.get(
    "/orders/{order_id}/receipt",
    response_model=ReceiptResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}
)
async def get_receipt(
    order_id: str,
    get_use_case: GetOrderUseCase = Depends(get_get_order_use_case),
    receipt_use_case: GenerateReceiptUseCase = Depends(get_receipt_use_case)
):
    """Чек по заказу"""
    try:
        order = await get_use_case(order_id)
        receipt = await receipt_use_case(order)
        return ReceiptResponse.from_domain(receipt)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Заказ не найден")
    except InvalidOrderError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (UserNotFoundError, ProductNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AccountsServiceError as e:
        raise HTTPException(status_code=503, detail=f"Service unavailable: {str(e)}")
