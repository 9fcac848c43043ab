"""
Record decoding for Catalog Sync.

Turns one raw OData record (field name -> JSON value as delivered) into a
Product. Decoding is strict: a missing or null field, or a currency value
that is not a finite number, raises DecodingFailure and nothing is
substituted.

Currency values are rounded with ROUND_HALF_UP, so ``12.3456`` becomes
``"12.35"`` and ``2.125`` becomes ``"2.13"``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from catalog_sync.domain.fields import TEXT_FIELDS, UNIT_PRICE
from catalog_sync.domain.models import Product
from catalog_sync.errors import DecodingFailure

RawRecord = Mapping[str, Any]

_CENTS = Decimal("0.01")


def format_currency(value: Any) -> str:
    """
    Render a currency value with exactly two fractional digits.

    Accepts numbers and numeric strings (OData V2 serializes ``Edm.Decimal``
    as a string). Raises ValueError for anything else, including booleans,
    NaN and infinities.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a currency value: {value!r}")
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            raise ValueError(f"Not a finite currency value: {value!r}")
        return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise ValueError(f"Not a currency value: {value!r}") from exc


def to_text(value: Any) -> str:
    """Textual representation of a scalar; booleans use JSON literals."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def _require(record: RawRecord, field: str, record_index: Optional[int]) -> Any:
    value = record.get(field)
    if value is None:
        raise DecodingFailure(
            f"Record {record_index} is missing field '{field}'",
            field=field,
            record_index=record_index,
        )
    return value


def decode_product(record: RawRecord, record_index: Optional[int] = None) -> Product:
    """
    Decode one raw record into a Product.

    Parameters
    ----------
    record : Mapping[str, Any]
        Field name -> value as delivered by the service.
    record_index : int | None
        Position of the record within the sync run, used in error messages.

    Raises
    ------
    DecodingFailure
        If a field is missing/null or the unit price is not numeric.
    """
    attrs = {
        attr: to_text(_require(record, field, record_index))
        for attr, field in TEXT_FIELDS.items()
    }

    raw_price = _require(record, UNIT_PRICE, record_index)
    try:
        attrs["unit_price"] = format_currency(raw_price)
    except ValueError as exc:
        raise DecodingFailure(
            f"Record {record_index} has non-numeric '{UNIT_PRICE}': {raw_price!r}",
            cause=exc,
            field=UNIT_PRICE,
            record_index=record_index,
        ) from exc

    return Product(**attrs)


__all__ = ["RawRecord", "decode_product", "format_currency", "to_text"]
