"""Integration tests for the product use cases."""

from decimal import Decimal

import pytest

from pos.application.add_product import AddProductHandler
from pos.application.list_products import ListProductsHandler
from pos.application.lookup_product import (
    GetProductByIdHandler,
    GetProductByScanCodeHandler,
)
from pos.application.update_product import UpdateProductHandler
from pos.domain.exceptions import (
    DuplicateScanCodeError,
    ProductNotFoundError,
    ValidationError,
)
from pos.domain.model.product import ProductPatch
from pos.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _seeded() -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    add = AddProductHandler(uow)
    add.handle("TEST001", "Test Product 1", "19.99")
    add.handle("TEST002", "Test Product 2", "29.95")
    return uow


class TestAddProduct:

    def test_add(self):
        uow = FakeUnitOfWork()
        dto = AddProductHandler(uow).handle("QR-1", "Coffee", "3.50")
        assert dto.id == 1
        assert dto.price == Decimal("3.50")
        assert dto.created_at == dto.updated_at
        assert uow.commits == 1

    def test_duplicate_scan_code_rejected(self):
        uow = _seeded()
        with pytest.raises(DuplicateScanCodeError, match="TEST001"):
            AddProductHandler(uow).handle("TEST001", "Another", "1.00")
        assert len(uow.products.list_all()) == 2

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            AddProductHandler(FakeUnitOfWork()).handle("X", "Thing", "-1")


class TestUpdateProduct:

    def test_partial_update(self):
        uow = _seeded()
        dto = UpdateProductHandler(uow).handle(1, ProductPatch(price=Money.of("21.00")))
        assert dto.price == Decimal("21.00")
        assert dto.name == "Test Product 1"
        assert dto.scan_code == "TEST001"

    def test_update_scan_code(self):
        uow = _seeded()
        UpdateProductHandler(uow).handle(1, ProductPatch(scan_code="NEW001"))
        lookup = GetProductByScanCodeHandler(uow)
        assert lookup.handle("NEW001").id == 1
        assert lookup.handle("TEST001") is None

    def test_keeping_own_scan_code_is_not_a_conflict(self):
        uow = _seeded()
        dto = UpdateProductHandler(uow).handle(
            1, ProductPatch(scan_code="TEST001", name="Renamed")
        )
        assert dto.name == "Renamed"

    def test_duplicate_scan_code_rejected(self):
        uow = _seeded()
        with pytest.raises(DuplicateScanCodeError, match="TEST002"):
            UpdateProductHandler(uow).handle(1, ProductPatch(scan_code="TEST002"))
        assert uow.products.get_by_id(1).scan_code == "TEST001"

    def test_missing_product(self):
        with pytest.raises(ProductNotFoundError, match="#42"):
            UpdateProductHandler(_seeded()).handle(42, ProductPatch(name="x"))


class TestLookups:

    def test_by_scan_code(self):
        dto = GetProductByScanCodeHandler(_seeded()).handle("TEST002")
        assert dto.name == "Test Product 2"
        assert dto.price == Decimal("29.95")

    def test_scan_code_is_case_sensitive(self):
        assert GetProductByScanCodeHandler(_seeded()).handle("test001") is None

    def test_unknown_scan_code_is_absent_not_error(self):
        assert GetProductByScanCodeHandler(_seeded()).handle("NOPE") is None

    def test_by_id(self):
        uow = _seeded()
        assert GetProductByIdHandler(uow).handle(2).scan_code == "TEST002"
        assert GetProductByIdHandler(uow).handle(99) is None

    def test_list_empty_store(self):
        handler = ListProductsHandler(FakeUnitOfWork())
        assert handler.handle() == []
        assert handler.handle() == []

    def test_list(self):
        assert [p.id for p in ListProductsHandler(_seeded()).handle()] == [1, 2]
