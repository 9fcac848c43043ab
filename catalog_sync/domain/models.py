"""
Domain models for Catalog Sync.

Defines the Product entity assembled from one OData ``Products`` record. All
attributes are stored as text, matching what the list and detail views
display. The remote field names each attribute is read from live in
`catalog_sync.domain.fields`.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class Product(BaseModel):
    """
    Representation of a single entity in the ``Products`` collection.
    """

    product_id: str = Field(..., description="Identity; unique within one sync run.")
    product_name: str = Field(..., description="Display name used by the list view.")
    supplier_id: str = Field(..., description="Supplier foreign key, as text.")
    category_id: str = Field(..., description="Category foreign key, as text.")
    quantity_per_unit: str = Field(..., description="Packaging description.")
    unit_price: str = Field(..., description="Currency value with exactly two decimals.")
    units_in_stock: str = Field(..., description="Stock count, as text.")
    units_on_order: str = Field(..., description="Ordered count, as text.")
    reorder_level: str = Field(..., description="Reorder threshold, as text.")
    discontinued: str = Field(..., description="Discontinued flag, as text.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }


__all__ = ["Product"]
