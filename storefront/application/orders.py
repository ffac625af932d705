import logging
from collections import Counter
from typing import List, Optional
from pydantic import BaseModel

from storefront.domain.models import Event, EventType, Order, OrderStatus
from storefront.domain.discounts import DiscountPolicy, NoDiscount
from storefront.domain.exceptions import InsufficientStockError, OrderNotFoundError, ProductNotFoundError
from storefront.application.interfaces import UnitOfWork
from storefront.application.notifications import NotificationBus
from storefront.application.validation import CreateOrderDTO, validate_order


logger = logging.getLogger(__name__)


class OrderDetails(BaseModel):
    order: Order
    discount_policy: str


class OrderOrchestrator:
    """Фасад над складом, заказами, скидками и уведомлениями.

    Порядок создания заказа:
    1. валидация запроса (все ошибки сразу)
    2. проверка наличия всех позиций до любых изменений
    3. списание остатков, уведомление о низком остатке по каждому товару
    4. расчет скидки, сохранение заказа, уведомление ORDER_CREATED
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        notification_bus: NotificationBus,
        discount_policy: Optional[DiscountPolicy] = None,
        low_stock_threshold: int = 10
    ):
        self._uow = unit_of_work
        self._bus = notification_bus
        self._discount_policy = discount_policy or NoDiscount()
        self._low_stock_threshold = low_stock_threshold
        # описание примененной скидки по id заказа, в запись заказа не сохраняется
        self._applied_policies: dict[int, str] = {}

    @property
    def discount_policy(self) -> DiscountPolicy:
        return self._discount_policy

    def set_discount_policy(self, policy: DiscountPolicy) -> None:
        self._discount_policy = policy
        logger.info(f"Стратегия скидки: {policy.describe()}")

    async def create_order(self, request: CreateOrderDTO, discount_policy: Optional[DiscountPolicy] = None) -> Order:
        logger.info(f"Создание заказа для клиента {request.customer_id}")
        validate_order(request)
        policy = discount_policy or self._discount_policy

        async with self._uow() as uow:
            # 1. Проверка наличия до списания: либо все позиции проходят, либо ничего не меняется
            requested = Counter()
            for item in request.items:
                requested[item.product_id] += item.quantity
            products = {}
            for product_id, quantity in requested.items():
                product = await uow.products.get_by_id(product_id)
                if not product:
                    raise ProductNotFoundError(product_id)
                if not product.has_stock(quantity):
                    raise InsufficientStockError(product.name, product.stock, quantity)
                products[product_id] = product

            # 2. Позиции и списание в порядке запроса
            order = Order(customer_id=request.customer_id, customer_name=request.customer_name)
            alerted = set()
            for item in request.items:
                product = products[item.product_id]
                order.add_item(product, item.quantity)
                product.reduce_stock(item.quantity)
                await uow.products.update(product.id, product)

                if product.stock < self._low_stock_threshold and product.id not in alerted:
                    alerted.add(product.id)
                    self._bus.publish(Event(
                        type=EventType.PRODUCT_LOW_STOCK,
                        payload={"product": product.model_copy(deep=True)}
                    ))

            # 3. Скидка
            order.apply_discount(policy.compute(order.subtotal))
            logger.info(
                f"Сумма {order.subtotal:.2f}, скидка {order.discount:.2f} ({policy.describe()}), итого {order.total:.2f}"
            )

            saved = await uow.orders.create(order)
            self._applied_policies[saved.id] = policy.describe()

        self._bus.publish(Event(type=EventType.ORDER_CREATED, payload={"order": saved.model_copy(deep=True)}))
        logger.info(f"Заказ создан: {saved.id}")
        return saved

    async def update_order_status(self, order_id: int, new_status) -> Order:
        logger.info(f"Обновление статуса заказа {order_id}")

        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            old_status = order.status
            order.update_status(new_status)
            order = await uow.orders.update(order_id, order)

        self._bus.publish(Event(
            type=EventType.ORDER_STATUS_CHANGED,
            payload={
                "order_id": order_id,
                "old_status": old_status,
                "new_status": order.status,
                "order": order.model_copy(deep=True)
            }
        ))
        logger.info(f"Статус заказа {order_id}: {old_status.value} -> {order.status.value}")
        return order

    async def cancel_order(self, order_id: int) -> Order:
        logger.info(f"Отмена заказа {order_id}")

        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            # до возврата остатков, чтобы отказ ничего не менял
            order.cancel()

            for item in order.items:
                product = await uow.products.get_by_id(item.product_id)
                if not product:
                    logger.warning(f"Товар {item.product_id} удален, остаток не восстановлен")
                    continue
                product.increase_stock(item.quantity)
                await uow.products.update(product.id, product)
                logger.info(f"Остаток восстановлен: {product.name} +{item.quantity}")

            order = await uow.orders.update(order_id, order)

        self._bus.publish(Event(type=EventType.ORDER_CANCELLED, payload={"order": order.model_copy(deep=True)}))
        logger.info(f"Заказ {order_id} отменен")
        return order

    async def get_order_details(self, order_id: int) -> OrderDetails:
        order = await self._uow.orders.get_by_id(order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        description = self._applied_policies.get(order_id, self._discount_policy.describe())
        return OrderDetails(order=order, discount_policy=description)

    async def list_orders(self) -> List[Order]:
        return await self._uow.orders.get_all()

    async def get_order_statistics(self) -> dict:
        return await self._uow.orders.statistics()
