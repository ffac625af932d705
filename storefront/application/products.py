import logging
from decimal import Decimal
from typing import List
from pydantic import BaseModel

from storefront.domain.models import Product
from storefront.domain.exceptions import DuplicateProductError, ProductNotFoundError
from storefront.application.interfaces import UnitOfWork
from storefront.application.validation import (
    CreateProductDTO, UpdateProductDTO, validate_new_product, validate_product_update
)

logger = logging.getLogger(__name__)


class ProductStatistics(BaseModel):
    total_products: int
    total_value: Decimal
    out_of_stock: int
    low_stock: int
    categories: dict[str, int]


class ProductService:
    def __init__(self, unit_of_work: UnitOfWork, low_stock_threshold: int = 10):
        self._uow = unit_of_work
        self._low_stock_threshold = low_stock_threshold

    async def create_product(self, dto: CreateProductDTO) -> Product:
        validate_new_product(dto)

        async with self._uow() as uow:
            if await uow.products.exists_by_name(dto.name):
                raise DuplicateProductError(dto.name)

            product = Product(
                name=dto.name,
                description=dto.description or "",
                price=dto.price,
                stock=dto.stock,
                category=dto.category
            )
            return await uow.products.create(product)

    async def get_product(self, product_id: int) -> Product:
        product = await self._uow.products.get_by_id(product_id)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    async def list_products(self) -> List[Product]:
        return await self._uow.products.get_all()

    async def list_by_category(self, category: str) -> List[Product]:
        return await self._uow.products.find_by_category(category)

    async def search_by_name(self, fragment: str) -> List[Product]:
        return await self._uow.products.find_by_name(fragment)

    async def update_product(self, product_id: int, dto: UpdateProductDTO) -> Product:
        validate_product_update(dto)
        fields = dto.model_dump(exclude_unset=True)

        async with self._uow() as uow:
            product = await uow.products.get_by_id(product_id)
            if not product:
                raise ProductNotFoundError(product_id)

            # при переименовании название должно остаться уникальным
            new_name = fields.get("name")
            if new_name and new_name.lower() != product.name.lower():
                if await uow.products.exists_by_name(new_name):
                    raise DuplicateProductError(new_name)

            product.apply_update(fields)
            updated = await uow.products.update(product_id, product)

        logger.info(f"Товар обновлен: {updated.name} (ID: {product_id})")
        return updated

    async def delete_product(self, product_id: int) -> bool:
        async with self._uow() as uow:
            return await uow.products.delete(product_id)

    async def low_stock(self, threshold: int | None = None) -> List[Product]:
        if threshold is None:
            threshold = self._low_stock_threshold
        return await self._uow.products.find_low_stock(threshold)

    async def statistics(self) -> ProductStatistics:
        products = await self._uow.products.get_all()

        categories: dict[str, int] = {}
        for product in products:
            categories[product.category] = categories.get(product.category, 0) + 1

        return ProductStatistics(
            total_products=len(products),
            total_value=sum((p.price * p.stock for p in products), Decimal("0")),
            out_of_stock=sum(1 for p in products if p.stock == 0),
            low_stock=sum(1 for p in products if 0 < p.stock < self._low_stock_threshold),
            categories=categories
        )
