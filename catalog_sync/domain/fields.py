"""
Remote field names of the OData ``Products`` entity set.
"""

from __future__ import annotations

PRODUCT_COLLECTION = "Products"

PRODUCT_ID = "ProductID"
PRODUCT_NAME = "ProductName"
SUPPLIER_ID = "SupplierID"
CATEGORY_ID = "CategoryID"
QUANTITY_PER_UNIT = "QuantityPerUnit"
UNIT_PRICE = "UnitPrice"
UNITS_IN_STOCK = "UnitsInStock"
UNITS_ON_ORDER = "UnitsOnOrder"
REORDER_LEVEL = "ReorderLevel"
DISCONTINUED = "Discontinued"

# Product attribute -> remote field, for every attribute copied as plain text.
TEXT_FIELDS = {
    "product_id": PRODUCT_ID,
    "product_name": PRODUCT_NAME,
    "supplier_id": SUPPLIER_ID,
    "category_id": CATEGORY_ID,
    "quantity_per_unit": QUANTITY_PER_UNIT,
    "units_in_stock": UNITS_IN_STOCK,
    "units_on_order": UNITS_ON_ORDER,
    "reorder_level": REORDER_LEVEL,
    "discontinued": DISCONTINUED,
}

__all__ = [
    "PRODUCT_COLLECTION",
    "PRODUCT_ID",
    "PRODUCT_NAME",
    "SUPPLIER_ID",
    "CATEGORY_ID",
    "QUANTITY_PER_UNIT",
    "UNIT_PRICE",
    "UNITS_IN_STOCK",
    "UNITS_ON_ORDER",
    "REORDER_LEVEL",
    "DISCONTINUED",
    "TEXT_FIELDS",
]
