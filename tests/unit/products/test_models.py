"""Unit tests for the Product model and its timestamp base.

Covers:
- Auto-assigned integer id.
- Unique name and non-negative constraints at the database level.
- ``updated_at`` refresh when ``update_fields`` is used.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductCreation:
    def test_id_is_assigned_on_save(self, make_product):
        product = make_product()
        assert isinstance(product.id, int)
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_str(self, make_product):
        assert str(make_product(name="Widget", stock_quantity=3)) == "Widget (3)"


class TestProductConstraints:
    def test_name_is_unique(self, make_product):
        make_product(name="Smartphone")
        with pytest.raises(IntegrityError), transaction.atomic():
            make_product(name="Smartphone")

    def test_negative_price_rejected_by_database(self, make_product):
        with pytest.raises(IntegrityError), transaction.atomic():
            make_product(price=Decimal("-0.01"))

    def test_full_clean_rejects_short_name(self):
        product = Product(name="ab", price=Decimal("1.00"), stock_quantity=1)
        with pytest.raises(ValidationError) as exc_info:
            product.full_clean()
        assert "name" in exc_info.value.message_dict

    def test_full_clean_rejects_negative_stock(self):
        product = Product(name="Widget", price=Decimal("1.00"), stock_quantity=-1)
        with pytest.raises(ValidationError) as exc_info:
            product.full_clean()
        assert "stock_quantity" in exc_info.value.message_dict


class TestTimestamps:
    def test_update_fields_also_refreshes_updated_at(self, make_product):
        product = make_product()
        before = product.updated_at

        product.name = "Renamed"
        product.save(update_fields=["name"])
        product.refresh_from_db()

        assert product.name == "Renamed"
        assert product.updated_at >= before
