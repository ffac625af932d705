import logging
from decimal import Decimal

from storefront.config import Settings
from storefront.domain.discounts import DiscountKind, DiscountSelector, build_discount_policy
from storefront.application.notifications import NotificationBus
from storefront.application.orders import OrderOrchestrator
from storefront.application.products import ProductService
from storefront.application.validation import CreateProductDTO
from storefront.infrastructure.listeners import AuditLogger, EmailNotifier, PushNotifier, StatisticsCollector
from storefront.infrastructure.repositories import InMemoryOrderRepository, InMemoryProductRepository
from storefront.infrastructure.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


DEMO_PRODUCTS = [
    CreateProductDTO(name="Ноутбук Dell XPS 13", description="Ультрабук на Intel i7",
                     price=Decimal("5999.90"), stock=25, category="Электроника"),
    CreateProductDTO(name="Мышь Logitech MX Master 3", description="Беспроводная эргономичная мышь",
                     price=Decimal("399.90"), stock=100, category="Периферия"),
    CreateProductDTO(name="Монитор LG UltraWide 34", description="Изогнутый монитор 21:9 WQHD",
                     price=Decimal("2499.90"), stock=15, category="Мониторы"),
    CreateProductDTO(name="Клавиатура Keychron K2", description="Механическая клавиатура 75%",
                     price=Decimal("599.90"), stock=8, category="Периферия"),
]


class Container:
    """Корень композиции: хранилища и сервисы создаются один раз и передаются явно"""

    def __init__(self, settings: Settings):
        self.products_repository = InMemoryProductRepository()
        self.orders_repository = InMemoryOrderRepository()
        self.unit_of_work = UnitOfWork(self.products_repository, self.orders_repository)

        self.email_notifier = EmailNotifier()
        self.audit_logger = AuditLogger()
        self.statistics_collector = StatisticsCollector()
        self.push_notifier = PushNotifier()

        self.notification_bus = NotificationBus()
        for listener in (self.email_notifier, self.audit_logger, self.statistics_collector, self.push_notifier):
            self.notification_bus.attach(listener)

        default_policy = build_discount_policy(DiscountSelector(kind=DiscountKind(settings.DEFAULT_DISCOUNT)))
        self.order_orchestrator = OrderOrchestrator(
            self.unit_of_work,
            self.notification_bus,
            discount_policy=default_policy,
            low_stock_threshold=settings.LOW_STOCK_THRESHOLD
        )
        self.product_service = ProductService(self.unit_of_work, settings.LOW_STOCK_THRESHOLD)

    async def seed_demo_data(self) -> None:
        for dto in DEMO_PRODUCTS:
            await self.product_service.create_product(dto)
        logger.info(f"Демо-данные загружены: {len(DEMO_PRODUCTS)} товаров")
