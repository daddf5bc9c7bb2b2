"""
Tests for app/services/product_repository.py

Covers: alias-keyed upsert, barcode full replacement, orphan barcodes,
idempotent resubmission, rollback on store errors, and product edits.
"""

import math

import pytest
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.models.product import Product, ProductBarcode
from app.schemas.product import NormalizedBarcode, NormalizedProduct, ProductUpdate
from app.schemas.settings import StockholdingConfig
from app.services.product_repository import (
    CatalogRepository,
    ProductBarcodeRepository,
    ProductRepository,
)

CONFIG = StockholdingConfig(default_weeks=8, min_weeks=1, max_weeks=52)


def _product(alias: str, **overrides) -> NormalizedProduct:
    data = {
        "product_alias": alias,
        "principal_company": "X",
        "product_name": f"{alias} name",
        "brand": "B",
        "case_size": "12x1L",
        "pack_size": "1L",
        "category": "Juice",
        "pack_count": 12,
        "container": "Carton",
        "stockholding_weeks": 8,
    }
    data.update(overrides)
    return NormalizedProduct(**data)


def _barcode(sku: str, barcode: str, kind: str = "CASE") -> NormalizedBarcode:
    return NormalizedBarcode(sku=sku, barcode=barcode, kind=kind)


def _catalog_state(db_session) -> tuple:
    """Observable catalog contents, independent of generated IDs."""
    products = {
        (p.product_alias, p.product_name, p.pack_count, p.stockholding_weeks)
        for p in db_session.query(Product).all()
    }
    barcodes = {
        (b.product.product_alias, b.barcode, b.kind)
        for b in db_session.query(ProductBarcode).all()
    }
    return products, barcodes


# ═══════════════════════════════════════════════════════════════════════════
# Reconciliation
# ═══════════════════════════════════════════════════════════════════════════

class TestUpsertProductsWithBarcodes:
    def test_creates_products_and_barcodes(self, db_session):
        products, barcodes = CatalogRepository.upsert_products_with_barcodes(
            db_session,
            [_product("NB-APPLE"), _product("NB-PEAR")],
            [
                _barcode("NB-APPLE", "6001234567890", "CASE"),
                _barcode("NB-APPLE", "6001234567891", "UNIT"),
                _barcode("NB-PEAR", "6009999999999", "CASE"),
            ],
        )

        assert [p.product_alias for p in products] == ["NB-APPLE", "NB-PEAR"]
        assert len(barcodes) == 3
        apple = ProductRepository.get_by_alias(db_session, "NB-APPLE")
        assert {b.kind for b in ProductBarcodeRepository.get_by_product_id(db_session, apple.id)} == {"CASE", "UNIT"}

    def test_barcodes_reference_store_ids(self, db_session):
        products, barcodes = CatalogRepository.upsert_products_with_barcodes(
            db_session, [_product("NB-APPLE")], [_barcode("NB-APPLE", "6001234567890")]
        )
        assert barcodes[0].product_id == products[0].id

    def test_existing_alias_is_overwritten_in_place(self, db_session):
        first, _ = CatalogRepository.upsert_products_with_barcodes(db_session, [_product("NB-APPLE")], [])
        original_id = first[0].id

        CatalogRepository.upsert_products_with_barcodes(
            db_session, [_product("NB-APPLE", product_name="Apple Juice 2L", pack_count=6)], []
        )

        assert db_session.query(Product).count() == 1
        stored = ProductRepository.get_by_alias(db_session, "NB-APPLE")
        assert stored.id == original_id
        assert stored.product_name == "Apple Juice 2L"
        assert stored.pack_count == 6

    def test_previous_barcodes_are_replaced(self, db_session):
        CatalogRepository.upsert_products_with_barcodes(
            db_session,
            [_product("NB-APPLE")],
            [_barcode("NB-APPLE", "11111111", "CASE"), _barcode("NB-APPLE", "22222222", "UNIT")],
        )
        CatalogRepository.upsert_products_with_barcodes(
            db_session, [_product("NB-APPLE")], [_barcode("NB-APPLE", "33333333", "CASE")]
        )

        stored = [(b.barcode, b.kind) for b in db_session.query(ProductBarcode).all()]
        assert stored == [("33333333", "CASE")]

    def test_products_outside_batch_keep_their_barcodes(self, db_session):
        CatalogRepository.upsert_products_with_barcodes(
            db_session, [_product("NB-PEAR")], [_barcode("NB-PEAR", "44444444")]
        )
        CatalogRepository.upsert_products_with_barcodes(
            db_session, [_product("NB-APPLE")], [_barcode("NB-APPLE", "55555555")]
        )
        assert db_session.query(ProductBarcode).count() == 2

    def test_orphan_barcodes_are_dropped(self, db_session):
        _, barcodes = CatalogRepository.upsert_products_with_barcodes(
            db_session,
            [_product("NB-APPLE")],
            [_barcode("NB-APPLE", "66666666"), _barcode("NB-GHOST", "77777777")],
        )
        assert [b.barcode for b in barcodes] == ["66666666"]
        assert db_session.query(ProductBarcode).count() == 1

    def test_duplicate_alias_last_row_wins(self, db_session):
        products, _ = CatalogRepository.upsert_products_with_barcodes(
            db_session,
            [_product("NB-APPLE", brand="First"), _product("NB-APPLE", brand="Second")],
            [],
        )
        assert len(products) == 1
        assert ProductRepository.get_by_alias(db_session, "NB-APPLE").brand == "Second"

    def test_resubmission_is_idempotent(self, db_session):
        products = [_product("NB-APPLE"), _product("NB-PEAR", stockholding_weeks=4)]
        barcodes = [
            _barcode("NB-APPLE", "6001234567890", "CASE"),
            _barcode("NB-APPLE", "6001234567891", "UNIT"),
            _barcode("NB-PEAR", "6009999999999", "UNIT"),
        ]

        CatalogRepository.upsert_products_with_barcodes(db_session, products, barcodes)
        once = _catalog_state(db_session)
        CatalogRepository.upsert_products_with_barcodes(db_session, products, barcodes)
        twice = _catalog_state(db_session)

        assert once == twice

    def test_empty_batch(self, db_session):
        products, barcodes = CatalogRepository.upsert_products_with_barcodes(db_session, [], [])
        assert products == [] and barcodes == []

    def test_store_error_rolls_back_everything(self, db_session, monkeypatch):
        def fail(*args, **kwargs):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(ProductBarcodeRepository, "delete_by_product_ids", staticmethod(fail))

        with pytest.raises(SQLAlchemyError):
            CatalogRepository.upsert_products_with_barcodes(
                db_session, [_product("NB-APPLE")], [_barcode("NB-APPLE", "6001234567890")]
            )

        assert db_session.query(Product).count() == 0
        assert db_session.query(ProductBarcode).count() == 0


# ═══════════════════════════════════════════════════════════════════════════
# Single-product edits
# ═══════════════════════════════════════════════════════════════════════════

class TestProductUpdate:
    def _stored(self, db_session):
        products, _ = CatalogRepository.upsert_products_with_barcodes(
            db_session, [_product("NB-APPLE")], [_barcode("NB-APPLE", "6001234567890")]
        )
        return products[0].id

    def test_update_within_bounds(self, db_session):
        product_id = self._stored(db_session)
        updated = ProductRepository.update(
            db_session, product_id, ProductUpdate(stockholding_weeks=12, brand="New"), CONFIG
        )
        assert updated.stockholding_weeks == 12
        assert updated.brand == "New"

    @pytest.mark.parametrize("weeks", [0.5, 53])
    def test_out_of_bounds_leaves_product_unchanged(self, db_session, weeks):
        product_id = self._stored(db_session)

        with pytest.raises(HTTPException) as exc_info:
            ProductRepository.update(
                db_session, product_id, ProductUpdate(stockholding_weeks=weeks, brand="Changed"), CONFIG
            )

        assert exc_info.value.status_code == 400
        stored = ProductRepository.get_by_id(db_session, product_id)
        assert stored.stockholding_weeks == 8
        assert stored.brand == "B"

    @pytest.mark.parametrize("weeks", [math.nan, math.inf, -math.inf])
    def test_non_finite_weeks_rejected_with_message(self, db_session, weeks):
        product_id = self._stored(db_session)
        update = ProductUpdate.model_construct(stockholding_weeks=weeks, brand="Changed")

        with pytest.raises(HTTPException) as exc_info:
            ProductRepository.update(db_session, product_id, update, CONFIG)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Stockholding weeks must be a finite number"
        stored = ProductRepository.get_by_id(db_session, product_id)
        assert stored.stockholding_weeks == 8
        assert stored.brand == "B"

    @pytest.mark.parametrize("weeks", [math.nan, math.inf])
    def test_update_schema_refuses_non_finite_weeks(self, weeks):
        with pytest.raises(ValidationError):
            ProductUpdate(stockholding_weeks=weeks)

    def test_store_error_rolls_back_update(self, db_session, monkeypatch):
        product_id = self._stored(db_session)

        def fail():
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(db_session, "commit", fail)
        with pytest.raises(SQLAlchemyError):
            ProductRepository.update(db_session, product_id, ProductUpdate(brand="Changed"), CONFIG)
        monkeypatch.undo()

        assert ProductRepository.get_by_id(db_session, product_id).brand == "B"

    def test_unknown_product(self, db_session):
        import uuid
        assert ProductRepository.update(db_session, uuid.uuid4(), ProductUpdate(brand="x"), CONFIG) is None

    def test_delete_removes_barcodes(self, db_session):
        product_id = self._stored(db_session)
        assert ProductRepository.delete(db_session, product_id) is True
        assert db_session.query(Product).count() == 0
        assert db_session.query(ProductBarcode).count() == 0
