from abc import ABC, abstractmethod
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from storefront.domain.exceptions import InvalidArgumentError


CENTS = Decimal("0.01")


def _percent_of(subtotal: Decimal, percentage: Decimal) -> Decimal:
    return (Decimal(subtotal) * percentage / Decimal(100)).quantize(CENTS, rounding=ROUND_HALF_UP)


def _check_percentage(percentage) -> Decimal:
    value = Decimal(str(percentage))
    if value < 0 or value > 100:
        raise InvalidArgumentError(f"Процент скидки должен быть от 0 до 100, получено {percentage}")
    return value


class DiscountPolicy(ABC):
    """Стратегия скидки: чистая функция от суммы заказа"""

    @abstractmethod
    def compute(self, subtotal: Decimal) -> Decimal:
        pass

    @abstractmethod
    def describe(self) -> str:
        pass


class NoDiscount(DiscountPolicy):
    def compute(self, subtotal: Decimal) -> Decimal:
        return Decimal("0")

    def describe(self) -> str:
        return "Без скидки"


class PercentageDiscount(DiscountPolicy):
    def __init__(self, percentage):
        self.percentage = _check_percentage(percentage)

    def compute(self, subtotal: Decimal) -> Decimal:
        return _percent_of(subtotal, self.percentage)

    def describe(self) -> str:
        return f"Скидка {self.percentage}%"


class FixedAmountDiscount(DiscountPolicy):
    def __init__(self, amount):
        self.amount = Decimal(str(amount))
        if self.amount < 0:
            raise InvalidArgumentError(f"Сумма скидки не может быть отрицательной, получено {amount}")

    def compute(self, subtotal: Decimal) -> Decimal:
        # скидка не больше суммы заказа
        return min(self.amount, Decimal(subtotal))

    def describe(self) -> str:
        return f"Скидка {self.amount:.2f}"


class TieredDiscount(DiscountPolicy):
    # (порог, процент) от большего к меньшему, срабатывает первый подходящий
    TIERS = (
        (Decimal("1000"), Decimal("15")),
        (Decimal("500"), Decimal("10")),
        (Decimal("200"), Decimal("5")),
        (Decimal("0"), Decimal("0")),
    )

    def compute(self, subtotal: Decimal) -> Decimal:
        for threshold, percentage in self.TIERS:
            if subtotal >= threshold:
                return _percent_of(subtotal, percentage)
        return Decimal("0")

    def describe(self) -> str:
        return "Прогрессивная скидка: 5% (от 200), 10% (от 500), 15% (от 1000)"


class FirstOrderDiscount(DiscountPolicy):
    """Скидка на первый заказ. Проверка, что заказ первый, — на вызывающей стороне"""

    def __init__(self, percentage=20):
        self.percentage = _check_percentage(percentage)

    def compute(self, subtotal: Decimal) -> Decimal:
        return _percent_of(subtotal, self.percentage)

    def describe(self) -> str:
        return f"Скидка {self.percentage}% на первый заказ"


class BlackFridayDiscount(DiscountPolicy):
    PERCENTAGE = Decimal("30")

    def compute(self, subtotal: Decimal) -> Decimal:
        return _percent_of(subtotal, self.PERCENTAGE)

    def describe(self) -> str:
        return "BLACK FRIDAY: 30% на всё"


class CouponDiscount(DiscountPolicy):
    def __init__(self, code: str, percentage, min_order_value=0):
        if not code or not code.strip():
            raise InvalidArgumentError("Код купона обязателен")
        self.code = code
        self.percentage = _check_percentage(percentage)
        self.min_order_value = Decimal(str(min_order_value))
        if self.min_order_value < 0:
            raise InvalidArgumentError("Минимальная сумма заказа не может быть отрицательной")

    def compute(self, subtotal: Decimal) -> Decimal:
        if subtotal < self.min_order_value:
            return Decimal("0")
        return _percent_of(subtotal, self.percentage)

    def describe(self) -> str:
        if self.min_order_value > 0:
            return f"Купон {self.code}: {self.percentage}% (минимум {self.min_order_value})"
        return f"Купон {self.code}: {self.percentage}%"


class DiscountKind(str, Enum):
    NONE = "none"
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    TIERED = "tiered"
    FIRST_ORDER = "first-order"
    BLACK_FRIDAY = "black-friday"
    COUPON = "coupon"


class DiscountSelector(BaseModel):
    """Выбор скидки из запроса: вид + параметры"""
    kind: DiscountKind = DiscountKind.NONE
    value: Optional[Decimal] = None
    coupon_code: Optional[str] = None
    min_order_value: Optional[Decimal] = None


def build_discount_policy(selector: DiscountSelector) -> DiscountPolicy:
    kind = selector.kind
    if kind == DiscountKind.NONE:
        return NoDiscount()
    elif kind == DiscountKind.PERCENTAGE:
        return PercentageDiscount(selector.value if selector.value is not None else 10)
    elif kind == DiscountKind.FIXED:
        return FixedAmountDiscount(selector.value if selector.value is not None else 50)
    elif kind == DiscountKind.TIERED:
        return TieredDiscount()
    elif kind == DiscountKind.FIRST_ORDER:
        return FirstOrderDiscount(selector.value if selector.value is not None else 20)
    elif kind == DiscountKind.BLACK_FRIDAY:
        return BlackFridayDiscount()
    elif kind == DiscountKind.COUPON:
        return CouponDiscount(
            selector.coupon_code or "WELCOME10",
            selector.value if selector.value is not None else 10,
            selector.min_order_value if selector.min_order_value is not None else 0,
        )
    raise InvalidArgumentError(f"Неизвестный вид скидки: {kind}")
