"""Integration tests for ProductService against the real Django store.

Covers the behavioural guarantees that only hold end to end:
- Name uniqueness across create/update sequences.
- The store constraint as the backstop when the pre-check is bypassed.
- Delete-then-lookup, including a delete that lands between an update's
  look-up and its write.
- Idempotent reads and the low-stock listing.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
import structlog

from modules.products.dtos import ProductInputDTO
from modules.products.exceptions import DuplicateResource, EmptyCollection, NotFound
from modules.products.models import Product
from modules.products.repositories import ProductDjangoRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.integration


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


@pytest.fixture()
def service(repo):
    return ProductService(repository=repo, logger=structlog.get_logger("tests"))


def _input(name: str, stock_quantity: int = 10, price: str = "1.00") -> ProductInputDTO:
    return ProductInputDTO(name=name, price=Decimal(price), stock_quantity=stock_quantity)


def _names_are_unique() -> bool:
    names = list(Product.objects.values_list("name", flat=True))
    return len(names) == len(set(names))


class TestUniqueness:
    def test_sequence_of_writes_never_duplicates_names(self, service):
        a = service.create_product(_input("Alpha")).product
        b = service.create_product(_input("Bravo")).product

        with pytest.raises(DuplicateResource):
            service.create_product(_input("Alpha"))
        with pytest.raises(DuplicateResource):
            service.update_product(b.id, _input("Alpha"))
        service.update_product(a.id, _input("Charlie"))
        service.update_product(b.id, _input("Alpha"))

        assert _names_are_unique()
        assert set(Product.objects.values_list("name", flat=True)) == {
            "Charlie",
            "Alpha",
        }

    def test_store_constraint_backs_up_the_pre_check(self, service, repo):
        service.create_product(_input("Smartphone", stock_quantity=4))

        with patch.object(repo, "get_by_name", return_value=None):
            with pytest.raises(DuplicateResource) as exc_info:
                service.create_product(_input("Smartphone", stock_quantity=50))

        assert exc_info.value.name == "Smartphone"
        assert Product.objects.count() == 1

    def test_names_are_case_sensitive(self, service):
        service.create_product(_input("Smartphone"))
        service.create_product(_input("smartphone"))
        assert Product.objects.count() == 2


class TestLifecycle:
    def test_delete_then_lookup_fails(self, service):
        created = service.create_product(_input("Smartphone")).product

        snapshot = service.delete_product(created.id)

        assert snapshot == created
        with pytest.raises(NotFound):
            service.update_product(created.id, _input("Smartphone"))
        with pytest.raises(NotFound):
            service.delete_product(created.id)

    def test_update_racing_a_delete_does_not_resurrect_the_row(self, service, repo):
        created = service.create_product(_input("Smartphone")).product
        loaded = Product.objects.get(id=created.id)
        Product.objects.filter(id=created.id).delete()

        with patch.object(repo, "get_by_id", return_value=loaded):
            with pytest.raises(NotFound):
                service.update_product(created.id, _input("Smartphone", 3))

        assert not Product.objects.exists()

    def test_list_all_is_idempotent(self, service):
        service.create_product(_input("Alpha", stock_quantity=1))
        service.create_product(_input("Bravo", stock_quantity=9))

        assert service.list_products() == service.list_products()

    def test_list_all_on_empty_store_raises(self, service):
        with pytest.raises(EmptyCollection):
            service.list_products()

    def test_low_stock_returns_only_products_below_five(self, service):
        low = service.create_product(_input("Low One", stock_quantity=4)).product
        service.create_product(_input("Plenty", stock_quantity=15))
        service.create_product(_input("At Edge", stock_quantity=5))

        assert service.list_low_stock() == [low]

    def test_alert_reflects_current_stock_after_update(self, service):
        created = service.create_product(_input("Widget", stock_quantity=2))
        assert created.alert == "stock low for Widget"

        updated = service.update_product(created.product.id, _input("Widget", 20))
        assert updated.alert is None
        assert service.list_products().alerts == []
