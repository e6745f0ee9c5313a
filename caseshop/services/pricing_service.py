"""Pricing service — rule table for configured cases.

price = base price + finish surcharge + material surcharge, in cents.
Options without a surcharge add zero.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType


def _frozen(table):
    return MappingProxyType(dict(table))


@dataclass(frozen=True)
class PricingRules:
    base_price: int = 1400
    finish_surcharges: MappingProxyType = field(
        default_factory=lambda: {"textured": 200}, hash=False
    )
    material_surcharges: MappingProxyType = field(
        default_factory=lambda: {"polycarbonate": 300}, hash=False
    )

    def __post_init__(self):
        # Copy the tables so later edits to the caller's dicts don't leak in.
        object.__setattr__(self, "finish_surcharges", _frozen(self.finish_surcharges))
        object.__setattr__(self, "material_surcharges", _frozen(self.material_surcharges))

    @classmethod
    def from_config(cls, app_config):
        """Build the rule table from the Flask config (see Config.BASE_PRICE etc)."""
        return cls(
            base_price=int(app_config["BASE_PRICE"]),
            finish_surcharges={
                "textured": int(app_config["FINISH_TEXTURED_SURCHARGE"]),
            },
            material_surcharges={
                "polycarbonate": int(app_config["MATERIAL_POLYCARBONATE_SURCHARGE"]),
            },
        )


def calculate_price(finish, material, rules):
    """Return the price in cents for a finish/material pair."""
    return (
        rules.base_price
        + rules.finish_surcharges.get(finish, 0)
        + rules.material_surcharges.get(material, 0)
    )


def to_currency_units(price_cents):
    """Convert cents to the decimal amount stored on an order (1400 -> 14.00)."""
    return (Decimal(price_cents) / 100).quantize(Decimal("0.01"))
