"""
Calculator - finds the best price for a product, venue and member.

Resolution:
1. Take the base price from the product's pricing option
2. Check each current modifier's conditions against the venue and member
3. Price every eligible modifier against the base price (modifiers never stack)
4. Best price is the lowest of the base price and all modifier prices
"""
from decimal import Decimal
from typing import Optional

from loguru import logger

from .adjustment_calculator import ModifierAdjustmentCalculator
from .condition_checker import Clock, ModifierConditionChecker
from .models import Member, PriceQuote, Product, ValidModifier, Venue, to_money


class Calculator:
    """
    Orchestrates condition checking and adjustment pricing.

    Holds no state between calls: each `calculate` returns its own
    PriceQuote, so one instance can be shared freely.
    """

    def __init__(
        self,
        condition_checker: Optional[ModifierConditionChecker] = None,
        adjustment_calculator: Optional[ModifierAdjustmentCalculator] = None,
        clock: Optional[Clock] = None,
    ):
        self.condition_checker = condition_checker or ModifierConditionChecker(clock=clock)
        self.adjustment_calculator = adjustment_calculator or ModifierAdjustmentCalculator()

    def calculate(self, product: Product, venue: Venue, member: Member) -> PriceQuote:
        """
        Calculate the best price with the list of modifiers that were met.

        Errors from either collaborator propagate and abort the calculation.
        """
        pricing_option = product.pricing_option
        base_price = to_money(pricing_option.price)
        best_price = base_price
        valid_modifiers = []

        for modifier in pricing_option.current_modifiers:
            if not self.condition_checker.check_conditions(modifier, venue, member):
                continue

            price = self.adjustment_calculator.calculate_price(base_price, modifier)
            valid_modifiers.append(ValidModifier(modifier=modifier, price=price))
            best_price = min(best_price, price)

        logger.info(
            f"Product {product.id} at venue {venue.id} for member {member.id}: "
            f"{len(valid_modifiers)} valid modifier(s), best price {best_price}"
        )

        return PriceQuote(
            base_price=base_price,
            best_price=best_price,
            valid_modifiers=tuple(valid_modifiers),
        )

    def get_best_price(self, product: Product, venue: Venue, member: Member) -> Decimal:
        """Best price only; use `calculate` to also see which modifiers applied."""
        return self.calculate(product, venue, member).best_price
