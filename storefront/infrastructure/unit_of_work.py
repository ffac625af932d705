import asyncio
from contextlib import asynccontextmanager

from storefront.application.interfaces import UnitOfWork as AbstractUnitOfWork
from storefront.infrastructure.repositories import InMemoryOrderRepository, InMemoryProductRepository


class UnitOfWork(AbstractUnitOfWork):
    """Единственная точка записи в хранилища.

    Все пишущие операции проходят под одной блокировкой, поэтому проверка
    остатка и его списание выполняются атомарно относительно других запросов.
    """

    def __init__(self, products: InMemoryProductRepository, orders: InMemoryOrderRepository):
        self._products = products
        self._orders = orders
        self._lock = asyncio.Lock()

    @property
    def products(self) -> InMemoryProductRepository:
        return self._products

    @property
    def orders(self) -> InMemoryOrderRepository:
        return self._orders

    @asynccontextmanager
    async def __call__(self):
        async with self._lock:
            yield _UnitOfWorkImpl(self._products, self._orders)


class _UnitOfWorkImpl:
    def __init__(self, products: InMemoryProductRepository, orders: InMemoryOrderRepository):
        self.products = products
        self.orders = orders
