from decimal import Decimal

import pytest

from storefront.domain.discounts import (
    BlackFridayDiscount, CouponDiscount, DiscountKind, DiscountSelector, FirstOrderDiscount,
    FixedAmountDiscount, NoDiscount, PercentageDiscount, TieredDiscount, build_discount_policy
)
from storefront.domain.exceptions import InvalidArgumentError


def test_no_discount():
    assert NoDiscount().compute(Decimal("999")) == 0


def test_percentage_and_tiered_differ_on_same_subtotal():
    subtotal = Decimal("1000")
    assert PercentageDiscount(10).compute(subtotal) == Decimal("100")
    assert TieredDiscount().compute(subtotal) == Decimal("150")


@pytest.mark.parametrize("percentage", [-1, 101])
def test_percentage_out_of_range_rejected(percentage):
    with pytest.raises(InvalidArgumentError):
        PercentageDiscount(percentage)


def test_percentage_bounds_accepted():
    assert PercentageDiscount(0).compute(Decimal("50")) == 0
    assert PercentageDiscount(100).compute(Decimal("50")) == Decimal("50")


def test_fixed_amount_capped_by_subtotal():
    policy = FixedAmountDiscount(50)
    assert policy.compute(Decimal("200")) == Decimal("50")
    assert policy.compute(Decimal("30")) == Decimal("30")


def test_fixed_amount_negative_rejected():
    with pytest.raises(InvalidArgumentError):
        FixedAmountDiscount(-5)


@pytest.mark.parametrize("subtotal, expected", [
    ("1500", "225"),
    ("1000", "150"),
    ("999.99", "100.00"),
    ("500", "50"),
    ("200", "10"),
    ("199.99", "0"),
    ("0", "0"),
])
def test_tiered_thresholds(subtotal, expected):
    assert TieredDiscount().compute(Decimal(subtotal)) == Decimal(expected)


def test_first_order_default_twenty_percent():
    assert FirstOrderDiscount().compute(Decimal("250")) == Decimal("50")
    assert FirstOrderDiscount(5).compute(Decimal("100")) == Decimal("5")


def test_black_friday_thirty_percent():
    assert BlackFridayDiscount().compute(Decimal("100")) == Decimal("30")


def test_coupon_minimum_order():
    coupon = CouponDiscount("SAVE10", 10, min_order_value=500)
    assert coupon.compute(Decimal("300")) == 0
    assert coupon.compute(Decimal("600")) == Decimal("60")
    assert "SAVE10" in coupon.describe()


def test_coupon_requires_code():
    with pytest.raises(InvalidArgumentError):
        CouponDiscount("  ", 10)


def test_percentage_rounded_to_cents():
    assert PercentageDiscount(15).compute(Decimal("10.33")) == Decimal("1.55")


@pytest.mark.parametrize("kind, policy_type", [
    (DiscountKind.NONE, NoDiscount),
    (DiscountKind.PERCENTAGE, PercentageDiscount),
    (DiscountKind.FIXED, FixedAmountDiscount),
    (DiscountKind.TIERED, TieredDiscount),
    (DiscountKind.FIRST_ORDER, FirstOrderDiscount),
    (DiscountKind.BLACK_FRIDAY, BlackFridayDiscount),
    (DiscountKind.COUPON, CouponDiscount),
])
def test_build_policy_for_every_kind(kind, policy_type):
    assert isinstance(build_discount_policy(DiscountSelector(kind=kind)), policy_type)


def test_build_policy_defaults():
    assert build_discount_policy(DiscountSelector(kind=DiscountKind.PERCENTAGE)).percentage == 10
    assert build_discount_policy(DiscountSelector(kind=DiscountKind.FIXED)).amount == 50
    coupon = build_discount_policy(DiscountSelector(kind=DiscountKind.COUPON))
    assert coupon.code == "WELCOME10"
    assert coupon.min_order_value == 0


def test_build_policy_rejects_bad_parameters():
    with pytest.raises(InvalidArgumentError):
        build_discount_policy(DiscountSelector(kind=DiscountKind.PERCENTAGE, value=Decimal("150")))


def test_selector_parses_hyphenated_kinds():
    assert DiscountSelector(kind="black-friday").kind == DiscountKind.BLACK_FRIDAY
    assert DiscountSelector(kind="first-order").kind == DiscountKind.FIRST_ORDER


def test_build_first_order_default_and_custom_value():
    default = build_discount_policy(DiscountSelector(kind=DiscountKind.FIRST_ORDER))
    custom = build_discount_policy(DiscountSelector(kind=DiscountKind.FIRST_ORDER, value=Decimal("5")))

    assert default.compute(Decimal("100")) == Decimal("20")
    assert custom.compute(Decimal("100")) == Decimal("5")
