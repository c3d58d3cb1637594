"""Unit tests for the Product entity and its coercions."""

from datetime import datetime, timedelta, timezone

import pytest

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import (
    DEFAULT_CATEGORY,
    Product,
    format_timestamp,
    parse_product_id,
    parse_timestamp,
    to_price,
    to_stock,
)

T0 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


def _widget(**overrides) -> Product:
    fields = {"product_id": 1, "name": "Widget", "price": "9.99", "now": T0}
    fields.update(overrides)
    return Product.create(**fields)


# ── Creation ─────────────────────────────────────────────────────────────────


class TestProductCreate:

    def test_defaults(self):
        p = _widget()
        assert p.description == ""
        assert p.category == DEFAULT_CATEGORY
        assert p.stock == 0

    def test_coerces_price_and_stock(self):
        p = _widget(price="12.50", stock="7")
        assert p.price == 12.5
        assert isinstance(p.price, float)
        assert p.stock == 7

    def test_timestamps_are_equal(self):
        p = _widget()
        assert p.created_at == p.updated_at == T0

    def test_custom_default_category(self):
        p = _widget(default_category="Misc")
        assert p.category == "Misc"

    def test_empty_category_gets_default(self):
        assert _widget(category="").category == DEFAULT_CATEGORY

    def test_invalid_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid price"):
            _widget(price="abc")


# ── Updates ──────────────────────────────────────────────────────────────────


class TestApplyChanges:

    def test_only_present_fields_change(self):
        p = _widget(description="Blue", stock=3)
        p.apply_changes({"stock": 5}, now=T0 + timedelta(seconds=1))
        assert p.stock == 5
        assert p.name == "Widget"
        assert p.description == "Blue"
        assert p.price == 9.99

    def test_falsy_values_still_overwrite(self):
        p = _widget(description="Blue", stock=3)
        p.apply_changes({"name": "", "stock": 0, "description": ""})
        assert p.name == ""
        assert p.stock == 0
        assert p.description == ""

    def test_id_and_created_at_are_immutable(self):
        p = _widget()
        p.apply_changes({"id": 99, "createdAt": "2000-01-01T00:00:00.000Z"})
        assert p.id == 1
        assert p.created_at == T0

    def test_empty_changes_still_refresh_updated_at(self):
        p = _widget()
        later = T0 + timedelta(minutes=5)
        p.apply_changes({}, now=later)
        assert p.updated_at == later

    def test_updated_at_never_goes_backwards(self):
        p = _widget()
        p.apply_changes({"stock": 1}, now=T0 - timedelta(hours=1))
        assert p.updated_at == T0

    def test_coercion_failure_leaves_product_untouched(self):
        p = _widget()
        with pytest.raises(ValidationError):
            p.apply_changes({"name": "Renamed", "price": "free"})
        assert p.name == "Widget"
        assert p.updated_at == T0


# ── Helpers ──────────────────────────────────────────────────────────────────


class TestCoercions:

    def test_to_price(self):
        assert to_price(3) == 3.0
        assert to_price("0.5") == 0.5

    def test_to_price_rejects_bool(self):
        with pytest.raises(ValidationError):
            to_price(True)

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-inf", float("nan")])
    def test_to_price_rejects_non_finite(self, value):
        with pytest.raises(ValidationError, match="Invalid price"):
            to_price(value)

    def test_to_stock_truncates_fractions(self):
        assert to_stock("5.7") == 5
        assert to_stock(4.2) == 4

    def test_to_stock_rejects_text(self):
        with pytest.raises(ValidationError, match="Invalid stock"):
            to_stock("many")

    @pytest.mark.parametrize(
        "value, expected",
        [
            (3, 3),
            ("3", 3),
            (" 42 ", 42),
            ("+7", 7),
            ("abc", None),
            ("1.5", None),
            ("--3", None),
            ("+-1", None),
            ("\u00b2", None),
            (None, None),
            (True, None),
        ],
    )
    def test_parse_product_id(self, value, expected):
        assert parse_product_id(value) == expected


class TestTimestamps:

    def test_format_uses_z_suffix_and_milliseconds(self):
        assert format_timestamp(T0) == "2024-05-01T10:00:00.000Z"

    def test_parse_reads_formatted_value(self):
        assert parse_timestamp("2024-05-01T10:00:00.000Z") == T0

    def test_parse_assumes_utc_for_naive_values(self):
        assert parse_timestamp("2024-05-01T10:00:00") == T0
