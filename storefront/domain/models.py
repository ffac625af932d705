from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, computed_field

from storefront.domain.exceptions import InsufficientStockError, InvalidArgumentError, InvalidStateError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class EventType(str, Enum):
    ORDER_CREATED = "ORDER_CREATED"
    ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"
    ORDER_CANCELLED = "ORDER_CANCELLED"
    PRODUCT_LOW_STOCK = "PRODUCT_LOW_STOCK"


class Product(BaseModel):
    """Domain Entity — товар на складе"""
    id: Optional[int] = None
    name: str
    description: str = ""
    price: Decimal
    stock: int
    category: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def reduce_stock(self, quantity: int) -> None:
        """Бизнес-правило: остаток не может уйти в минус"""
        if not self.has_stock(quantity):
            raise InsufficientStockError(self.name, self.stock, quantity)
        self.stock -= quantity
        self.updated_at = utcnow()

    def increase_stock(self, quantity: int) -> None:
        self.stock += quantity
        self.updated_at = utcnow()

    def apply_update(self, fields: dict[str, Any]) -> None:
        """Частичное обновление: меняются только переданные поля"""
        for key in ("name", "description", "price", "stock", "category"):
            if key in fields and fields[key] is not None:
                setattr(self, key, fields[key])
        self.updated_at = utcnow()


class OrderItem(BaseModel):
    """Value Object — позиция заказа, цена и название фиксируются на момент заказа"""
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class Order(BaseModel):
    """Domain Entity — заказ"""
    id: Optional[int] = None
    customer_id: str
    customer_name: str
    items: list[OrderItem] = Field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    discount: Decimal = Decimal("0")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))

    @computed_field
    @property
    def total(self) -> Decimal:
        return max(Decimal("0"), self.subtotal - self.discount)

    def add_item(self, product: Product, quantity: int) -> None:
        self.items.append(
            OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                unit_price=product.price,
            )
        )
        self.updated_at = utcnow()

    def apply_discount(self, amount: Decimal) -> None:
        self.discount = amount
        self.updated_at = utcnow()

    def update_status(self, status) -> None:
        try:
            self.status = OrderStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise InvalidArgumentError(f"Недопустимый статус: {status}. Допустимые: {allowed}")
        self.updated_at = utcnow()

    def can_be_cancelled(self) -> bool:
        """Бизнес-правило: отменить можно только PENDING или PROCESSING"""
        return self.status in (OrderStatus.PENDING, OrderStatus.PROCESSING)

    def cancel(self) -> None:
        if not self.can_be_cancelled():
            raise InvalidStateError(f"Заказ {self.id} нельзя отменить в статусе {self.status.value}")
        self.status = OrderStatus.CANCELLED
        self.updated_at = utcnow()


class Event(BaseModel):
    """Событие предметной области: тип + полезная нагрузка"""
    type: EventType
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime = Field(default_factory=utcnow)
