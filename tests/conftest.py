import os
import sys
from datetime import date, datetime
from decimal import Decimal

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from pricing_calculator.engine import (
    AdjustmentType,
    Member,
    PricingModifier,
    PricingOption,
    Product,
    Venue,
)


# Fixed evaluation instant used across the suite
NOW = datetime(2026, 6, 15, 12, 0, 0)


def fixed_clock():
    return NOW


def make_modifier(
    id=1,
    name="Test modifier",
    conditions=(),
    adjustment_type=AdjustmentType.OVERRIDE,
    adjustment_value="5.00",
) -> PricingModifier:
    return PricingModifier(
        id=id,
        name=name,
        conditions=tuple(conditions),
        adjustment_type=adjustment_type,
        adjustment_value=Decimal(str(adjustment_value)),
    )


def make_product(price="10.00", modifiers=()) -> Product:
    return Product(
        id=1,
        name="Squash Court",
        pricing_option=PricingOption(id=1, price=Decimal(str(price)), current_modifiers=tuple(modifiers)),
    )


def make_venue(location="Leeds") -> Venue:
    return Venue(id=1, name="Test Venue", location=location)


def make_member(age=40, membership_type="bronze", birthday_passed=True) -> Member:
    """
    Member who is exactly `age` on NOW.

    With birthday_passed=False the birthday falls tomorrow, so the member
    is still `age - 1`.
    """
    if birthday_passed:
        dob = date(NOW.year - age, NOW.month, NOW.day)
    else:
        dob = date(NOW.year - age, NOW.month, NOW.day + 1)
    return Member(id=1, name="Test Member", date_of_birth=dob, membership_type=membership_type)


@pytest.fixture
def venue():
    return make_venue()


@pytest.fixture
def member():
    return make_member()
