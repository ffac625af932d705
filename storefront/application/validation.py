from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field

from storefront.domain.exceptions import ValidationError


class OrderItemDTO(BaseModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = None


class CreateOrderDTO(BaseModel):
    customer_id: str = ""
    customer_name: str = ""
    items: List[OrderItemDTO] = Field(default_factory=list)


class CreateProductDTO(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category: Optional[str] = None


class UpdateProductDTO(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category: Optional[str] = None


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_order(dto: CreateOrderDTO) -> None:
    errors = []

    if _is_blank(dto.customer_id):
        errors.append("ID клиента обязателен")
    if _is_blank(dto.customer_name):
        errors.append("Имя клиента обязательно")

    if not dto.items:
        errors.append("Заказ должен содержать хотя бы одну позицию")
    for index, item in enumerate(dto.items, start=1):
        if item.product_id is None or item.product_id <= 0:
            errors.append(f"Позиция {index}: ID товара обязателен")
        if item.quantity is None or item.quantity <= 0:
            errors.append(f"Позиция {index}: количество должно быть больше нуля")

    if errors:
        raise ValidationError(errors)


def _product_field_errors(fields: dict[str, Any]) -> List[str]:
    """Проверка только переданных полей товара"""
    errors = []

    if "name" in fields:
        name = fields["name"]
        if _is_blank(name):
            errors.append("Название товара обязательно")
        elif len(name.strip()) < 3:
            errors.append("Название товара должно быть не короче 3 символов")
        elif len(name) > 100:
            errors.append("Название товара должно быть не длиннее 100 символов")

    if "description" in fields and fields["description"] and len(fields["description"]) > 500:
        errors.append("Описание должно быть не длиннее 500 символов")

    if "price" in fields:
        price = fields["price"]
        if price is None:
            errors.append("Цена обязательна")
        elif price < 0:
            errors.append("Цена не может быть отрицательной")
        elif price == 0:
            errors.append("Цена должна быть больше нуля")

    if "stock" in fields:
        stock = fields["stock"]
        if stock is None:
            errors.append("Остаток обязателен")
        elif stock < 0:
            errors.append("Остаток не может быть отрицательным")

    if "category" in fields and _is_blank(fields["category"]):
        errors.append("Категория обязательна")

    return errors


def validate_new_product(dto: CreateProductDTO) -> None:
    fields = dto.model_dump()
    # описание необязательно при создании
    errors = _product_field_errors(fields)
    if errors:
        raise ValidationError(errors)


def validate_product_update(dto: UpdateProductDTO) -> None:
    errors = _product_field_errors(dto.model_dump(exclude_unset=True))
    if errors:
        raise ValidationError(errors)
