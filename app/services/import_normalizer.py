"""
Catalog import normalizer.

Turns raw import rows into the two record sets the catalog stores:
product masters (one per row) and barcodes (zero to two per row, CASE
and UNIT).
"""

import math
import re
from typing import List

from app.schemas.catalog_import import STOCKHOLDING_COLUMN, ImportRow
from app.schemas.product import NormalizedProduct, NormalizedBarcode
from app.schemas.settings import StockholdingConfig
from app.services.import_validator import cell_text

_LEADING_DIGITS = re.compile(r"^[0-9]+")
_WHITESPACE = re.compile(r"\s+")
_LEADING_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Template column -> product field
PRODUCT_FIELD_MAP = {
    "Product Alias": "product_alias",
    "PrincipalCompany": "principal_company",
    "Product Name": "product_name",
    "Brand": "brand",
    "Case Size": "case_size",
    "Pack size": "pack_size",
    "Category": "category",
    "Container": "container",
}


def parse_pack_count(value: str) -> int:
    """Base-10 parse of the leading digits; 0 when blank or unparseable."""
    match = _LEADING_DIGITS.match(value.strip())
    if not match:
        return 0
    return int(match.group(0))


def parse_stockholding_weeks(value: str, default_weeks: float) -> float:
    """
    Float from the leading number of the optional column (" 10.5 wks" -> 10.5,
    "1_0" -> 1.0), falling back to the policy default when there is none or
    it is not finite.
    """
    match = _LEADING_FLOAT.match(value.strip())
    if not match:
        return default_weeks
    weeks = float(match.group(0))
    if not math.isfinite(weeks):
        return default_weeks
    return weeks


def clean_barcode(value: str) -> str:
    """Strip every whitespace character from a barcode."""
    return _WHITESPACE.sub("", value)


def normalize_products(rows: List[ImportRow], config: StockholdingConfig) -> List[NormalizedProduct]:
    """
    Build one product master per row.

    String fields are trimmed (empty when absent), Pack Count becomes a
    non-negative integer and stockholding weeks come from the optional
    column or the policy default.
    """
    products = []
    for row in rows:
        fields = {
            field: cell_text(row, column).strip()
            for column, field in PRODUCT_FIELD_MAP.items()
        }
        products.append(NormalizedProduct(
            **fields,
            pack_count=parse_pack_count(cell_text(row, "Pack Count")),
            stockholding_weeks=parse_stockholding_weeks(
                cell_text(row, STOCKHOLDING_COLUMN), config.default_weeks
            ),
        ))
    return products


def normalize_barcodes(rows: List[ImportRow]) -> List[NormalizedBarcode]:
    """Emit a CASE and/or UNIT barcode per row, keyed by product alias."""
    barcodes = []
    for row in rows:
        product_alias = cell_text(row, "Product Alias").strip()
        case_barcode = clean_barcode(cell_text(row, "Case barcode"))
        unit_barcode = clean_barcode(cell_text(row, "Unit Barcode"))

        if case_barcode:
            barcodes.append(NormalizedBarcode(sku=product_alias, barcode=case_barcode, kind="CASE"))
        if unit_barcode:
            barcodes.append(NormalizedBarcode(sku=product_alias, barcode=unit_barcode, kind="UNIT"))
    return barcodes
