"""
Domain package for Catalog Sync.

Exports the Product entity and the record decoding helpers used by the
synchronization routine. Keep this package free of I/O.
"""

from catalog_sync.domain.decoding import RawRecord, decode_product, format_currency, to_text
from catalog_sync.domain.models import Product

__all__ = [
    "Product",
    "RawRecord",
    "decode_product",
    "format_currency",
    "to_text",
]
