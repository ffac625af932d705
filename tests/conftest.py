from decimal import Decimal

import pytest

from storefront.application.notifications import NotificationBus
from storefront.application.orders import OrderOrchestrator
from storefront.application.products import ProductService
from storefront.application.validation import CreateOrderDTO, CreateProductDTO, OrderItemDTO
from storefront.infrastructure.listeners import AuditLogger, StatisticsCollector
from storefront.infrastructure.repositories import InMemoryOrderRepository, InMemoryProductRepository
from storefront.infrastructure.unit_of_work import UnitOfWork


@pytest.fixture
def products_repo():
    return InMemoryProductRepository()


@pytest.fixture
def orders_repo():
    return InMemoryOrderRepository()


@pytest.fixture
def uow(products_repo, orders_repo):
    return UnitOfWork(products_repo, orders_repo)


@pytest.fixture
def audit():
    return AuditLogger()


@pytest.fixture
def stats():
    return StatisticsCollector()


@pytest.fixture
def bus(audit, stats):
    bus = NotificationBus()
    bus.attach(audit)
    bus.attach(stats)
    return bus


@pytest.fixture
def orchestrator(uow, bus):
    return OrderOrchestrator(uow, bus)


@pytest.fixture
def product_service(uow):
    return ProductService(uow)


@pytest.fixture
def make_product(product_service):
    async def _make(name="Keyboard", price="100.00", stock=50, category="Peripherals", description=""):
        return await product_service.create_product(
            CreateProductDTO(
                name=name,
                description=description,
                price=Decimal(price),
                stock=stock,
                category=category
            )
        )
    return _make


def order_request(*items, customer_id="c-1", customer_name="Alice"):
    """items: пары (product_id, quantity)"""
    return CreateOrderDTO(
        customer_id=customer_id,
        customer_name=customer_name,
        items=[OrderItemDTO(product_id=pid, quantity=qty) for pid, qty in items]
    )


@pytest.fixture
def make_order_request():
    return order_request
