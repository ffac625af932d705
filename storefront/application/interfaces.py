from abc import ABC, abstractmethod
from typing import Optional, List

from storefront.domain.models import Event, Order, OrderStatus, Product


class ProductRepository(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_all(self) -> List[Product]:
        pass

    @abstractmethod
    async def create(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def update(self, product_id: int, product: Product) -> Product:
        pass

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        pass

    @abstractmethod
    async def find_by_category(self, category: str) -> List[Product]:
        pass

    @abstractmethod
    async def find_by_name(self, fragment: str) -> List[Product]:
        pass

    @abstractmethod
    async def find_low_stock(self, threshold: int = 10) -> List[Product]:
        pass

    @abstractmethod
    async def exists_by_name(self, name: str) -> bool:
        pass


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    async def get_all(self) -> List[Order]:
        pass

    @abstractmethod
    async def create(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def update(self, order_id: int, order: Order) -> Order:
        pass

    @abstractmethod
    async def delete(self, order_id: int) -> bool:
        pass

    @abstractmethod
    async def find_by_customer_id(self, customer_id: str) -> List[Order]:
        pass

    @abstractmethod
    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        pass

    @abstractmethod
    async def statistics(self) -> dict:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def products(self) -> ProductRepository:
        pass

    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @abstractmethod
    def __call__(self):
        pass


class EventListener(ABC):
    """Подписчик шины уведомлений"""

    @abstractmethod
    def handle(self, event: Event) -> None:
        pass

    @abstractmethod
    def name(self) -> str:
        pass
