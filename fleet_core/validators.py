"""Validation helpers shared across fleet manager services."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, List, Optional, Union

from .exceptions import ValidationError
from .models import BoatCategory

RECORD_FIELDS = ("category", "name", "year", "make_model", "length", "purchase_price")
FIELD_SEPARATOR = ","


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_money(raw: object, field: str) -> Decimal:
    """Convert raw input to a finite, non-negative Decimal with two fraction digits."""
    if isinstance(raw, float):
        raw = repr(raw)
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")

    try:
        return _quantize_two_decimals(amount)
    except InvalidOperation as exc:
        raise ValidationError(f"{field} is too large") from exc


def parse_count(raw: object, field: str) -> int:
    """Parse a whole, non-negative number such as a model year or a length in feet."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a whole number")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"{field} must be a whole number (got '{raw}')") from exc
    if value < 0:
        raise ValidationError(f"{field} must not be negative")
    return value


def validate_required_str(value: object, field: str, max_length: Optional[int] = None) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if max_length is not None and len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def decode_line(line: Union[str, bytes]) -> str:
    """Decode one raw import line as UTF-8, tolerating a leading byte-order mark."""
    if isinstance(line, str):
        return line
    try:
        return line.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError(f"line is not valid UTF-8 text (byte {exc.start})") from exc


def split_record(line: str) -> List[str]:
    """Split one delimited record into its six raw fields."""
    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) != len(RECORD_FIELDS):
        raise ValidationError(
            f"expected {len(RECORD_FIELDS)} comma-separated fields, got {len(parts)}"
        )
    return parts


def parse_record(line: str) -> Dict[str, object]:
    """Parse ``CATEGORY,NAME,YEAR,MAKE_MODEL,LENGTH,PRICE`` into validated fields."""
    return validate_boat_fields(**dict(zip(RECORD_FIELDS, split_record(line))))


def validate_boat_fields(
    category: object,
    name: object,
    year: object,
    make_model: object,
    length: object,
    purchase_price: object,
) -> Dict[str, object]:
    return {
        "category": category if isinstance(category, BoatCategory) else BoatCategory.from_str(category),
        "name": validate_required_str(name, "name"),
        "year": parse_count(year, "year"),
        "make_model": validate_required_str(make_model, "make_model"),
        "length": parse_count(length, "length"),
        "purchase_price": parse_money(purchase_price, "purchase_price"),
    }
