"""Engine subpackage - condition checking, adjustment pricing and best-price resolution."""
from .calculator import Calculator
from .condition_checker import ModifierConditionChecker
from .adjustment_calculator import ModifierAdjustmentCalculator
from .errors import (
    EntityNotFoundError,
    InvalidModifierData,
    PricingError,
    UnrecognizedAdjustmentType,
    UnrecognizedConditionKind,
)
from .models import (
    AdjustmentType,
    AgeRange,
    ConditionKind,
    Member,
    MembershipTypes,
    PriceQuote,
    PricingModifier,
    PricingOption,
    Product,
    ValidModifier,
    Venue,
    VenueLocations,
    parse_conditions,
)

__all__ = [
    'Calculator', 'ModifierConditionChecker', 'ModifierAdjustmentCalculator',
    'PricingError', 'UnrecognizedConditionKind', 'UnrecognizedAdjustmentType', 'EntityNotFoundError',
    'InvalidModifierData',
    'AdjustmentType', 'ConditionKind', 'AgeRange', 'VenueLocations', 'MembershipTypes',
    'PricingModifier', 'PricingOption', 'Product', 'Venue', 'Member',
    'ValidModifier', 'PriceQuote', 'parse_conditions',
]
