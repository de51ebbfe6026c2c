"""
Data models for the pricing engine.

Uses frozen dataclasses so nothing handed to the calculator can be changed
while a price is being worked out.
"""
import json
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import ClassVar, Mapping, Optional, Union

from .errors import InvalidModifierData, UnrecognizedAdjustmentType, UnrecognizedConditionKind


class AdjustmentType(str, Enum):
    """How a modifier turns the original price into its own price."""

    MULTIPLIER = "multiplier"  # ratio applied to the original price
    FIXED = "fixed"            # signed delta added to the original price
    OVERRIDE = "override"      # absolute replacement price


class ConditionKind(str, Enum):
    """Keys used for conditions in stored modifier data."""

    AGE_RANGE = "age_range"
    VENUE_LOCATIONS = "venue_locations"
    MEMBERSHIP_TYPES = "membership_types"


def to_money(value) -> Decimal:
    """Coerce a stored number to Decimal, keeping its printed value."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ── Conditions ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class AgeRange:
    """Member age must fall within [age_from, age_to]; None leaves a side open."""

    kind: ClassVar[ConditionKind] = ConditionKind.AGE_RANGE

    age_from: Optional[int] = None
    age_to: Optional[int] = None

    def to_payload(self) -> dict:
        payload = {}
        if self.age_from is not None:
            payload['from'] = self.age_from
        if self.age_to is not None:
            payload['to'] = self.age_to
        return payload


@dataclass(frozen=True)
class VenueLocations:
    """Venue location must be one of the listed locations."""

    kind: ClassVar[ConditionKind] = ConditionKind.VENUE_LOCATIONS

    locations: frozenset[str] = frozenset()

    def to_payload(self) -> list[str]:
        return sorted(self.locations)


@dataclass(frozen=True)
class MembershipTypes:
    """Member's membership type must be one of the listed types."""

    kind: ClassVar[ConditionKind] = ConditionKind.MEMBERSHIP_TYPES

    membership_types: frozenset[str] = frozenset()

    def to_payload(self) -> list[str]:
        return sorted(self.membership_types)


Condition = Union[AgeRange, VenueLocations, MembershipTypes]


def _optional_int(kind: ConditionKind, bound: str, value) -> Optional[int]:
    if value is None or value == '':
        return None
    # bool is an int subclass but never a valid age
    if isinstance(value, bool):
        raise InvalidModifierData(f"{kind.value} '{bound}' must be a whole number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidModifierData(f"{kind.value} '{bound}' must be a whole number, got {value!r}") from None


def _string_set(kind: ConditionKind, payload) -> frozenset[str]:
    # A bare string would otherwise be split into single characters
    if not isinstance(payload, (list, tuple)):
        raise InvalidModifierData(f"{kind.value} must be a list, got {type(payload).__name__}")
    if not all(isinstance(v, str) for v in payload):
        raise InvalidModifierData(f"{kind.value} must contain only strings, got {list(payload)!r}")
    return frozenset(payload)


def parse_conditions(mapping: Optional[Mapping]) -> tuple[Condition, ...]:
    """
    Build condition objects from a stored {kind: payload} mapping.

    Raises UnrecognizedConditionKind for any key outside ConditionKind and
    InvalidModifierData when a payload does not have the expected shape
    (mapping for age_range, list of strings for the set kinds).
    """
    if mapping is None:
        return ()
    if not isinstance(mapping, Mapping):
        raise InvalidModifierData(f"conditions must be a mapping, got {type(mapping).__name__}")

    conditions = []
    for key, payload in mapping.items():
        try:
            kind = ConditionKind(key)
        except ValueError:
            raise UnrecognizedConditionKind(key) from None

        if kind is ConditionKind.AGE_RANGE:
            if not isinstance(payload, Mapping):
                raise InvalidModifierData(f"{kind.value} must be a mapping, got {type(payload).__name__}")
            conditions.append(AgeRange(
                age_from=_optional_int(kind, 'from', payload.get('from')),
                age_to=_optional_int(kind, 'to', payload.get('to')),
            ))
        elif kind is ConditionKind.VENUE_LOCATIONS:
            conditions.append(VenueLocations(_string_set(kind, payload)))
        else:
            conditions.append(MembershipTypes(_string_set(kind, payload)))

    return tuple(conditions)


# ── Entities ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PricingModifier:
    """A conditional rule that yields an alternative price when it applies."""

    id: int
    name: str
    conditions: tuple[Condition, ...]
    adjustment_type: AdjustmentType
    adjustment_value: Decimal

    @classmethod
    def from_record(
        cls,
        id: int,
        name: str,
        conditions: Union[str, Mapping, None],
        adjustment_type: str,
        adjustment_value,
    ) -> 'PricingModifier':
        """Create a modifier from stored values (conditions may be a JSON string)."""
        if isinstance(conditions, str):
            try:
                conditions = json.loads(conditions) if conditions.strip() else {}
            except json.JSONDecodeError as e:
                raise InvalidModifierData(f"conditions are not valid JSON ({e.msg})") from e

        try:
            parsed_type = AdjustmentType(adjustment_type)
        except ValueError:
            raise UnrecognizedAdjustmentType(adjustment_type) from None

        try:
            value = to_money(adjustment_value)
        except InvalidOperation:
            raise InvalidModifierData(f"adjustment value {adjustment_value!r} is not a number") from None

        return cls(
            id=int(id),
            name=str(name),
            conditions=parse_conditions(conditions),
            adjustment_type=parsed_type,
            adjustment_value=value,
        )

    def conditions_payload(self) -> dict:
        """Conditions in their stored {kind: payload} shape."""
        return {c.kind.value: c.to_payload() for c in self.conditions}


@dataclass(frozen=True)
class PricingOption:
    """Base price plus the modifiers currently attached to it."""

    id: int
    price: Decimal
    current_modifiers: tuple[PricingModifier, ...] = ()


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    pricing_option: PricingOption


@dataclass(frozen=True)
class Venue:
    id: int
    name: str
    location: str


@dataclass(frozen=True)
class Member:
    id: int
    name: str
    date_of_birth: date
    membership_type: str

    def age_on(self, today: date) -> int:
        """Whole years elapsed between date of birth and `today`."""
        dob = self.date_of_birth
        years = today.year - dob.year
        # Feb 29 birthdays are reached on Mar 1 in non-leap years
        if (today.month, today.day) < (dob.month, dob.day):
            years -= 1
        return years


# ── Results ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ValidModifier:
    """A modifier whose conditions were met, with the price it produced."""

    modifier: PricingModifier
    price: Decimal


@dataclass(frozen=True)
class PriceQuote:
    """Complete result of a best-price calculation."""

    base_price: Decimal
    best_price: Decimal
    valid_modifiers: tuple[ValidModifier, ...] = field(default_factory=tuple)
