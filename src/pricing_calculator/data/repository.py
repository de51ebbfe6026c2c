"""
Pricing Repository - loads products, venues, members and pricing modifiers
from CSV files and builds engine entities from them.

Also owns the "current modifier" filter: a modifier is attached to a pricing
option through pricing_option_modifiers.csv and counts as current when the
link is active and `now` falls inside [valid_from, valid_to).
"""
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from ..engine.errors import EntityNotFoundError
from ..engine.models import Member, PricingModifier, PricingOption, Product, Venue, to_money


TRUE_VALUES = ('true', '1', 'yes', 'on')


class PricingRepository:
    """
    File-backed store for everything the calculator needs.

    Files expected in `data_dir`:
    - products.csv: id, name, pricing_option_id
    - pricing_options.csv: id, price
    - pricing_modifiers.csv: id, name, conditions (JSON), adjustment_type, adjustment_value
    - pricing_option_modifiers.csv: pricing_option_id, pricing_modifier_id, valid_from, valid_to, active
    - venues.csv: id, name, location
    - members.csv: id, name, date_of_birth, membership_type
    """

    FILES = {
        'products': 'products.csv',
        'pricing_options': 'pricing_options.csv',
        'pricing_modifiers': 'pricing_modifiers.csv',
        'option_modifiers': 'pricing_option_modifiers.csv',
        'venues': 'venues.csv',
        'members': 'members.csv',
    }

    def __init__(self, data_dir: Path, seed: Optional[int] = None):
        """Load all CSV files from `data_dir`."""
        self.data_dir = Path(data_dir)
        self.seed = seed

        for attr, filename in self.FILES.items():
            path = self.data_dir / filename
            if not path.exists():
                raise FileNotFoundError(f"{filename} not found at {path}.")

            # Everything as stripped strings; empty cells stay empty
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
            for col in df.columns:
                df[col] = df[col].str.strip()
            setattr(self, attr, df)

        logger.debug(
            f"Loaded {len(self.products)} products, {len(self.pricing_modifiers)} modifiers, "
            f"{len(self.venues)} venues and {len(self.members)} members from {self.data_dir}"
        )

    # ── Lookups ──────────────────────────────────────────────────────

    def _find_row(self, df: pd.DataFrame, entity: str, entity_id) -> pd.Series:
        match = df[df['id'] == str(entity_id).strip()]
        if match.empty:
            raise EntityNotFoundError(entity, entity_id)
        return match.iloc[0]

    def _random_row(self, df: pd.DataFrame, entity: str) -> pd.Series:
        if df.empty:
            raise EntityNotFoundError(entity)
        return df.sample(n=1, random_state=self.seed).iloc[0]

    def get_product(self, product_id, now: Optional[datetime] = None) -> Product:
        """Product with its pricing option and the option's current modifiers."""
        return self._build_product(self._find_row(self.products, 'product', product_id), now)

    def get_venue(self, venue_id) -> Venue:
        return self._build_venue(self._find_row(self.venues, 'venue', venue_id))

    def get_member(self, member_id) -> Member:
        return self._build_member(self._find_row(self.members, 'member', member_id))

    def random_product(self, now: Optional[datetime] = None) -> Product:
        return self._build_product(self._random_row(self.products, 'product'), now)

    def random_venue(self) -> Venue:
        return self._build_venue(self._random_row(self.venues, 'venue'))

    def random_member(self) -> Member:
        return self._build_member(self._random_row(self.members, 'member'))

    def get_pricing_option(self, pricing_option_id, now: Optional[datetime] = None) -> PricingOption:
        row = self._find_row(self.pricing_options, 'pricing option', pricing_option_id)
        return PricingOption(
            id=int(row['id']),
            price=to_money(row['price']),
            current_modifiers=self.current_modifiers(row['id'], now),
        )

    def get_modifier(self, modifier_id) -> PricingModifier:
        """
        Build a modifier from its stored row.

        Malformed conditions or adjustment types raise here, at the point the
        stored data is decoded.
        """
        row = self._find_row(self.pricing_modifiers, 'pricing modifier', modifier_id)
        return PricingModifier.from_record(
            id=row['id'],
            name=row['name'],
            conditions=row['conditions'],
            adjustment_type=row['adjustment_type'],
            adjustment_value=row['adjustment_value'],
        )

    # ── Current modifiers ────────────────────────────────────────────

    def current_modifiers(self, pricing_option_id, now: Optional[datetime] = None) -> tuple[PricingModifier, ...]:
        """
        Modifiers attached to a pricing option that are active and valid at `now`.

        Returned in the order the links appear in pricing_option_modifiers.csv.
        Stored validity dates are naive UTC; a timezone-aware `now` is
        converted to UTC before comparing.
        """
        now_ts = pd.Timestamp(now or datetime.now())
        if now_ts.tz is not None:
            now_ts = now_ts.tz_convert(None)
        links = self.option_modifiers[
            self.option_modifiers['pricing_option_id'] == str(pricing_option_id).strip()
        ]
        if links.empty:
            return ()

        active = links['active'].str.lower().isin(TRUE_VALUES)
        valid_from = pd.to_datetime(links['valid_from'].where(links['valid_from'] != ''))
        valid_to = pd.to_datetime(links['valid_to'].where(links['valid_to'] != ''))

        current = links[
            active
            & (valid_from.isna() | (valid_from <= now_ts))
            & (valid_to.isna() | (now_ts < valid_to))
        ]

        return tuple(self.get_modifier(modifier_id) for modifier_id in current['pricing_modifier_id'])

    # ── Builders ─────────────────────────────────────────────────────

    def _build_product(self, row: pd.Series, now: Optional[datetime]) -> Product:
        return Product(
            id=int(row['id']),
            name=row['name'],
            pricing_option=self.get_pricing_option(row['pricing_option_id'], now),
        )

    def _build_venue(self, row: pd.Series) -> Venue:
        return Venue(id=int(row['id']), name=row['name'], location=row['location'])

    def _build_member(self, row: pd.Series) -> Member:
        return Member(
            id=int(row['id']),
            name=row['name'],
            date_of_birth=date.fromisoformat(row['date_of_birth']),
            membership_type=row['membership_type'],
        )
