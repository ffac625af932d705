import logging
from decimal import Decimal
from typing import Generic, Optional, List, TypeVar
from pydantic import BaseModel

from storefront.domain.models import Order, OrderStatus, Product
from storefront.domain.exceptions import OrderNotFoundError, ProductNotFoundError
from storefront.application.interfaces import OrderRepository, ProductRepository

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class InMemoryStore(Generic[RecordT]):
    """Упорядоченное хранилище id → запись с автоинкрементом.

    Хранилище владеет записями: наружу отдаются копии, внутрь кладутся копии.
    Id никогда не переиспользуются, даже после удаления.
    """

    not_found_error = LookupError

    def __init__(self):
        self._records: dict[int, RecordT] = {}
        self._last_id = 0

    def _next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    async def get_by_id(self, record_id: int) -> Optional[RecordT]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record else None

    async def get_all(self) -> List[RecordT]:
        return [record.model_copy(deep=True) for record in self._records.values()]

    async def create(self, record: RecordT) -> RecordT:
        stored = record.model_copy(deep=True)
        stored.id = self._next_id()
        self._records[stored.id] = stored
        return stored.model_copy(deep=True)

    async def update(self, record_id: int, record: RecordT) -> RecordT:
        if record_id not in self._records:
            raise self.not_found_error(record_id)
        stored = record.model_copy(deep=True)
        stored.id = record_id
        self._records[record_id] = stored
        return stored.model_copy(deep=True)

    async def delete(self, record_id: int) -> bool:
        if record_id not in self._records:
            raise self.not_found_error(record_id)
        del self._records[record_id]
        return True

    async def count(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
        self._last_id = 0


class InMemoryProductRepository(InMemoryStore[Product], ProductRepository):
    not_found_error = ProductNotFoundError

    async def create(self, product: Product) -> Product:
        created = await super().create(product)
        logger.info(f"Товар создан: {created.name} (ID: {created.id})")
        return created

    async def delete(self, product_id: int) -> bool:
        deleted = await super().delete(product_id)
        logger.info(f"Товар удален: ID {product_id}")
        return deleted

    async def find_by_category(self, category: str) -> List[Product]:
        return [p for p in await self.get_all() if p.category == category]

    async def find_by_name(self, fragment: str) -> List[Product]:
        needle = fragment.lower()
        return [p for p in await self.get_all() if needle in p.name.lower()]

    async def find_low_stock(self, threshold: int = 10) -> List[Product]:
        return [p for p in await self.get_all() if p.stock < threshold]

    async def exists_by_name(self, name: str) -> bool:
        return any(p.name.lower() == name.lower() for p in self._records.values())


class InMemoryOrderRepository(InMemoryStore[Order], OrderRepository):
    not_found_error = OrderNotFoundError

    async def create(self, order: Order) -> Order:
        created = await super().create(order)
        logger.info(f"Заказ сохранен: {created.customer_name} (ID: {created.id})")
        return created

    async def find_by_customer_id(self, customer_id: str) -> List[Order]:
        return [o for o in await self.get_all() if o.customer_id == customer_id]

    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        return [o for o in await self.get_all() if o.status == status]

    async def total_sales(self) -> Decimal:
        completed = await self.find_by_status(OrderStatus.COMPLETED)
        return sum((o.total for o in completed), Decimal("0"))

    async def statistics(self) -> dict:
        orders = await self.get_all()
        stats = {"total": len(orders)}
        for status in OrderStatus:
            stats[status.value.lower()] = sum(1 for o in orders if o.status == status)
        stats["total_sales"] = await self.total_sales()
        return stats
