from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from storefront.container import Container
from storefront.domain.models import EventType
from storefront.domain.discounts import build_discount_policy
from storefront.domain.exceptions import (
    InsufficientStockError, InvalidArgumentError, InvalidStateError, NotFoundError, ValidationError
)
from storefront.application.orders import OrderOrchestrator
from storefront.application.products import ProductService, ProductStatistics
from storefront.application.validation import (
    CreateOrderDTO, CreateProductDTO, OrderItemDTO, UpdateProductDTO
)
from storefront.infrastructure.listeners import AuditEntry, RealtimeStatistics
from storefront.presentation.schemas import (
    CreateOrderRequest, CreateProductRequest, ErrorResponse, OrderDetailsResponse, OrderResponse,
    ProductResponse, UpdateOrderStatusRequest, UpdateProductRequest
)

router = APIRouter()


# Зависимости берутся из контейнера, собранного при старте приложения
def get_container(request: Request) -> Container:
    return request.app.state.container


def get_order_orchestrator(container: Container = Depends(get_container)) -> OrderOrchestrator:
    return container.order_orchestrator


def get_product_service(container: Container = Depends(get_container)) -> ProductService:
    return container.product_service


# ---------- Товары ----------

@router.get("/products", response_model=List[ProductResponse])
async def list_products(service: ProductService = Depends(get_product_service)):
    """Все товары"""
    products = await service.list_products()
    return [ProductResponse.from_domain(p) for p in products]


@router.get("/products/stats", response_model=ProductStatistics)
async def product_statistics(service: ProductService = Depends(get_product_service)):
    """Статистика склада"""
    return await service.statistics()


@router.get("/products/low-stock", response_model=List[ProductResponse])
async def low_stock_products(
    threshold: Optional[int] = Query(None, ge=0),
    service: ProductService = Depends(get_product_service)
):
    """Товары с низким остатком"""
    products = await service.low_stock(threshold)
    return [ProductResponse.from_domain(p) for p in products]


@router.get(
    "/products/search",
    response_model=List[ProductResponse],
    responses={400: {"model": ErrorResponse}}
)
async def search_products(
    name: Optional[str] = None,
    service: ProductService = Depends(get_product_service)
):
    """Поиск по части названия"""
    if not name:
        raise HTTPException(status_code=400, detail="Параметр 'name' обязателен")
    products = await service.search_by_name(name)
    return [ProductResponse.from_domain(p) for p in products]


@router.get("/products/category/{category}", response_model=List[ProductResponse])
async def products_by_category(category: str, service: ProductService = Depends(get_product_service)):
    """Товары категории"""
    products = await service.list_by_category(category)
    return [ProductResponse.from_domain(p) for p in products]


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Получить товар по ID"""
    try:
        product = await service.get_product(product_id)
        return ProductResponse.from_domain(product)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/products",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def create_product(request: CreateProductRequest, service: ProductService = Depends(get_product_service)):
    """Создать товар"""
    try:
        product = await service.create_product(CreateProductDTO(**request.model_dump()))
        return ProductResponse.from_domain(product)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    service: ProductService = Depends(get_product_service)
):
    """Частичное обновление товара"""
    try:
        dto = UpdateProductDTO(**request.model_dump(exclude_unset=True))
        product = await service.update_product(product_id, dto)
        return ProductResponse.from_domain(product)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/products/{product_id}", responses={404: {"model": ErrorResponse}})
async def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Удалить товар"""
    try:
        await service.delete_product(product_id)
        return {"status": "ok", "message": "Товар удален"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ---------- Заказы ----------

@router.get("/orders", response_model=List[OrderResponse])
async def list_orders(orchestrator: OrderOrchestrator = Depends(get_order_orchestrator)):
    """Все заказы"""
    orders = await orchestrator.list_orders()
    return [OrderResponse.from_domain(o) for o in orders]


@router.get("/orders/stats")
async def order_statistics(orchestrator: OrderOrchestrator = Depends(get_order_orchestrator)):
    """Количество заказов по статусам и выручка по завершенным"""
    return await orchestrator.get_order_statistics()


@router.get("/orders/realtime-stats", response_model=RealtimeStatistics)
async def realtime_statistics(container: Container = Depends(get_container)):
    """Счетчики из подписчика статистики"""
    return container.statistics_collector.get_statistics()


@router.get("/orders/audit-logs", response_model=List[AuditEntry])
async def audit_logs(
    event_type: Optional[EventType] = Query(None, alias="type"),
    container: Container = Depends(get_container)
):
    """Журнал аудита, опционально по типу события"""
    if event_type is not None:
        return container.audit_logger.get_logs_by_type(event_type)
    return container.audit_logger.get_logs()


@router.get(
    "/orders/{order_id}",
    response_model=OrderDetailsResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_order(order_id: int, orchestrator: OrderOrchestrator = Depends(get_order_orchestrator)):
    """Получить заказ по ID"""
    try:
        details = await orchestrator.get_order_details(order_id)
        return OrderDetailsResponse.from_details(details)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/orders",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    request: CreateOrderRequest,
    orchestrator: OrderOrchestrator = Depends(get_order_orchestrator)
):
    """Создать новый заказ"""
    try:
        policy = build_discount_policy(request.discount_selector())
        dto = CreateOrderDTO(
            customer_id=request.customer_id,
            customer_name=request.customer_name,
            items=[OrderItemDTO(product_id=i.product_id, quantity=i.quantity) for i in request.items]
        )
        order = await orchestrator.create_order(dto, discount_policy=policy)
        return OrderResponse.from_domain(order)

    except (ValidationError, InvalidArgumentError, InsufficientStockError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    orchestrator: OrderOrchestrator = Depends(get_order_orchestrator)
):
    """Обновить статус заказа"""
    try:
        order = await orchestrator.update_order_status(order_id, request.status)
        return OrderResponse.from_domain(order)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}
)
async def cancel_order(order_id: int, orchestrator: OrderOrchestrator = Depends(get_order_orchestrator)):
    """Отменить заказ и вернуть товар на склад"""
    try:
        order = await orchestrator.cancel_order(order_id)
        return OrderResponse.from_domain(order)
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
