"""Tests for the pricing rule table."""

from decimal import Decimal

import pytest

from caseshop.services.pricing_service import (
    PricingRules,
    calculate_price,
    to_currency_units,
)


class TestCalculatePrice:

    @pytest.mark.parametrize(
        "finish, material, expected",
        [
            ("plain", "silicone", 1400),
            ("textured", "silicone", 1600),
            ("plain", "polycarbonate", 1700),
            ("textured", "polycarbonate", 1900),
        ],
    )
    def test_default_rules(self, finish, material, expected):
        assert calculate_price(finish, material, PricingRules()) == expected

    def test_base_plus_both_surcharges(self):
        rules = PricingRules(
            base_price=1000,
            finish_surcharges={"textured": 150},
            material_surcharges={"polycarbonate": 275},
        )
        for finish in ("plain", "textured"):
            for material in ("silicone", "polycarbonate"):
                expected = (
                    1000
                    + (150 if finish == "textured" else 0)
                    + (275 if material == "polycarbonate" else 0)
                )
                assert calculate_price(finish, material, rules) == expected

    def test_repeated_calls_are_stable(self):
        rules = PricingRules()
        first = calculate_price("textured", "polycarbonate", rules)
        calculate_price("plain", "silicone", rules)
        assert calculate_price("textured", "polycarbonate", rules) == first

    def test_rules_from_app_config(self, app):
        rules = PricingRules.from_config(app.config)
        assert rules.base_price == 1400
        assert rules.finish_surcharges == {"textured": 200}
        assert rules.material_surcharges == {"polycarbonate": 300}


class TestCurrencyUnits:

    def test_cents_to_amount(self):
        assert to_currency_units(1400) == Decimal("14.00")
        assert to_currency_units(1905) == Decimal("19.05")


class TestRulesImmutable:

    def test_surcharge_table_cannot_be_edited(self):
        rules = PricingRules()
        with pytest.raises(TypeError):
            rules.finish_surcharges["textured"] = 0
        assert calculate_price("textured", "silicone", rules) == 1600

    def test_caller_dict_changes_do_not_leak_in(self):
        finishes = {"textured": 200}
        rules = PricingRules(finish_surcharges=finishes)
        finishes["textured"] = 9999
        assert calculate_price("textured", "silicone", rules) == 1600

    def test_rules_are_hashable(self):
        assert hash(PricingRules()) == hash(PricingRules())
        assert PricingRules() == PricingRules()
