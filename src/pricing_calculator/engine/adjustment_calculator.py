"""
Modifier Adjustment Calculator - works out the price a modifier produces.
"""
from decimal import ROUND_HALF_UP, Decimal

from .errors import UnrecognizedAdjustmentType
from .models import AdjustmentType, PricingModifier, to_money


PENNY = Decimal('0.01')


class ModifierAdjustmentCalculator:
    """
    Applies a modifier's adjustment to an original price.

    - multiplier: original × value, rounded half-up to the penny
    - fixed: original + value (not rounded)
    - override: value, whatever the original price
    """

    def calculate_price(self, original_price, modifier: PricingModifier) -> Decimal:
        original_price = to_money(original_price)
        value = to_money(modifier.adjustment_value)

        if modifier.adjustment_type == AdjustmentType.MULTIPLIER:
            return (original_price * value).quantize(PENNY, rounding=ROUND_HALF_UP)

        elif modifier.adjustment_type == AdjustmentType.FIXED:
            return original_price + value

        elif modifier.adjustment_type == AdjustmentType.OVERRIDE:
            return value

        raise UnrecognizedAdjustmentType(getattr(modifier.adjustment_type, 'value', modifier.adjustment_type))
