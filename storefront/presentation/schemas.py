from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from storefront.domain.models import OrderStatus
from storefront.domain.discounts import DiscountKind, DiscountSelector


class OrderItemRequest(BaseModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = None


class CreateOrderRequest(BaseModel):
    customer_id: str = ""
    customer_name: str = ""
    items: List[OrderItemRequest] = Field(default_factory=list)
    discount_type: DiscountKind = DiscountKind.NONE
    discount_value: Optional[Decimal] = None
    coupon_code: Optional[str] = None
    min_order_value: Optional[Decimal] = None

    def discount_selector(self) -> DiscountSelector:
        return DiscountSelector(
            kind=self.discount_type,
            value=self.discount_value,
            coupon_code=self.coupon_code,
            min_order_value=self.min_order_value
        )


class UpdateOrderStatusRequest(BaseModel):
    status: str


class CreateProductRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category: Optional[str] = None


class UpdateProductRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category: Optional[str] = None


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    category: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, product):
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            category=product.category,
            created_at=product.created_at,
            updated_at=product.updated_at
        )


class OrderItemResponse(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderResponse(BaseModel):
    id: int
    customer_id: str
    customer_name: str
    items: List[OrderItemResponse]
    status: OrderStatus
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order):
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal
                )
                for item in order.items
            ],
            status=order.status,
            subtotal=order.subtotal,
            discount=order.discount,
            total=order.total,
            created_at=order.created_at,
            updated_at=order.updated_at
        )


class OrderDetailsResponse(OrderResponse):
    discount_policy: str

    @classmethod
    def from_details(cls, details):
        base = OrderResponse.from_domain(details.order)
        return cls(**base.model_dump(), discount_policy=details.discount_policy)


class ErrorResponse(BaseModel):
    detail: str
