"""
Modifier Condition Checker - decides whether a pricing modifier applies
to a venue/member combination.
"""
from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from .errors import UnrecognizedConditionKind
from .models import AgeRange, Member, MembershipTypes, PricingModifier, Venue, VenueLocations


Clock = Callable[[], datetime]


class ModifierConditionChecker:
    """
    Checks every condition on a modifier against the purchase context.

    All conditions must pass; evaluation stops at the first failure.
    A modifier without conditions always applies.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or datetime.now

    def check_conditions(self, modifier: PricingModifier, venue: Venue, member: Member) -> bool:
        for condition in modifier.conditions:
            if isinstance(condition, AgeRange):
                member_age = member.age_on(self.clock().date())

                if (
                    (condition.age_from is not None and member_age < condition.age_from)
                    or (condition.age_to is not None and member_age > condition.age_to)
                ):
                    logger.debug(
                        f"Modifier {modifier.id}: member age {member_age} outside "
                        f"{condition.age_from}-{condition.age_to}"
                    )
                    return False

            elif isinstance(condition, VenueLocations):
                if venue.location not in condition.locations:
                    logger.debug(f"Modifier {modifier.id}: venue location {venue.location!r} not eligible")
                    return False

            elif isinstance(condition, MembershipTypes):
                if member.membership_type not in condition.membership_types:
                    logger.debug(
                        f"Modifier {modifier.id}: membership type {member.membership_type!r} not eligible"
                    )
                    return False

            else:
                raise UnrecognizedConditionKind(getattr(condition, 'kind', type(condition).__name__))

        return True
