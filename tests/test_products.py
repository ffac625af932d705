from decimal import Decimal

import pytest

from storefront.application.validation import CreateProductDTO, UpdateProductDTO
from storefront.domain.exceptions import DuplicateProductError, ProductNotFoundError, ValidationError


@pytest.mark.asyncio
async def test_create_and_get(product_service, make_product):
    created = await make_product("Headset", price="59.90", stock=12, category="Audio")

    fetched = await product_service.get_product(created.id)

    assert fetched.name == "Headset"
    assert fetched.price == Decimal("59.90")
    assert fetched.description == ""


@pytest.mark.asyncio
async def test_create_reports_every_violation(product_service):
    with pytest.raises(ValidationError) as exc_info:
        await product_service.create_product(
            CreateProductDTO(name="AB", price=Decimal("-100"), stock=-5, category="")
        )

    assert len(exc_info.value.errors) == 4


@pytest.mark.asyncio
async def test_zero_price_rejected(product_service):
    with pytest.raises(ValidationError):
        await product_service.create_product(
            CreateProductDTO(name="Freebie", price=Decimal("0"), stock=1, category="Misc")
        )


@pytest.mark.asyncio
async def test_duplicate_name_case_insensitive(product_service, make_product):
    await make_product("Webcam")
    with pytest.raises(DuplicateProductError):
        await make_product("WEBCAM")


@pytest.mark.asyncio
async def test_partial_update(product_service, make_product):
    product = await make_product("Speaker", price="30.00", stock=5)

    updated = await product_service.update_product(product.id, UpdateProductDTO(stock=15))

    assert updated.stock == 15
    assert updated.price == Decimal("30.00")
    assert updated.name == "Speaker"


@pytest.mark.asyncio
async def test_update_validates_only_given_fields(product_service, make_product):
    product = await make_product("Speaker")

    with pytest.raises(ValidationError) as exc_info:
        await product_service.update_product(product.id, UpdateProductDTO(price=Decimal("0")))

    assert len(exc_info.value.errors) == 1


@pytest.mark.asyncio
async def test_rename_to_existing_name_rejected(product_service, make_product):
    await make_product("Router")
    switch = await make_product("Switch")

    with pytest.raises(DuplicateProductError):
        await product_service.update_product(switch.id, UpdateProductDTO(name="router"))

    renamed = await product_service.update_product(switch.id, UpdateProductDTO(name="SWITCH"))
    assert renamed.name == "SWITCH"


@pytest.mark.asyncio
async def test_missing_product(product_service):
    with pytest.raises(ProductNotFoundError):
        await product_service.get_product(3)
    with pytest.raises(ProductNotFoundError):
        await product_service.update_product(3, UpdateProductDTO(stock=1))
    with pytest.raises(ProductNotFoundError):
        await product_service.delete_product(3)


@pytest.mark.asyncio
async def test_delete(product_service, make_product):
    product = await make_product("Tablet")

    assert await product_service.delete_product(product.id) is True
    assert await product_service.list_products() == []


@pytest.mark.asyncio
async def test_search_category_and_low_stock(product_service, make_product):
    await make_product("USB Hub", stock=0, category="Accessories")
    await make_product("usb cable", stock=4, category="Accessories")
    await make_product("Display", stock=25, category="Displays")

    assert len(await product_service.search_by_name("USB")) == 2
    assert len(await product_service.list_by_category("Accessories")) == 2
    assert [p.name for p in await product_service.low_stock()] == ["USB Hub", "usb cable"]
    assert [p.name for p in await product_service.low_stock(1)] == ["USB Hub"]


@pytest.mark.asyncio
async def test_statistics(product_service, make_product):
    await make_product("USB Hub", price="10.00", stock=0, category="Accessories")
    await make_product("usb cable", price="2.50", stock=4, category="Accessories")
    await make_product("Display", price="200.00", stock=25, category="Displays")

    stats = await product_service.statistics()

    assert stats.total_products == 3
    assert stats.total_value == Decimal("5010.00")
    assert stats.out_of_stock == 1
    assert stats.low_stock == 1
    assert stats.categories == {"Accessories": 2, "Displays": 1}
