"""Parse raw form fields into PropertyAttributes.

Numeric text is parsed forgivingly by default: blank or malformed values are
treated as absent (area, year) or zero (counts), mirroring how the intake form
behaves while the user is still typing. Pass ``strict=True`` to reject
malformed numbers instead.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .models import PropertyAttributes

_TRUE_VALUES = {"1", "true", "yes", "y", "on", "sim", "x"}
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
# pt-BR grouping: "1.234,50". A dot without a comma stays a decimal point.
_GROUPED_RE = re.compile(r"^[+-]?\d{1,3}(\.\d{3})+,\d*$")


class InvalidFieldError(ValueError):
    """A form field holds text that is not a valid number (strict mode only)."""

    def __init__(self, field_name: str, value: Any) -> None:
        super().__init__(f"Invalid value for '{field_name}': {value!r}")
        self.field_name = field_name
        self.value = value


def _normalize_number(text: str) -> str:
    """Accept a decimal comma ('80,5'), pt-BR grouping and ignore spaces."""
    s = text.strip().replace(" ", "")
    if _GROUPED_RE.match(s):
        return s.replace(".", "").replace(",", ".")
    if "," in s and "." not in s:
        s = s.replace(",", ".")
    return s


def parse_float(value: Any) -> float | None:
    """Parse a real number; None for blank, malformed or non-finite input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
        return num if math.isfinite(num) else None
    s = _normalize_number(str(value))
    if not _NUMBER_RE.match(s):
        return None
    num = float(s)
    return num if math.isfinite(num) else None


def parse_int(value: Any) -> int | None:
    """Parse an integer; decimals are truncated, None for blank or malformed input."""
    num = parse_float(value)
    if num is None:
        return None
    return int(num)


def parse_bool(value: Any) -> bool:
    """Checkbox-style parse: anything not recognizably true is False."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _field(
    fields: Mapping[str, Any],
    name: str,
    parser: Any,
    strict: bool,
) -> Any:
    raw = fields.get(name)
    parsed = parser(raw)
    if strict and parsed is None and not _is_blank(raw):
        raise InvalidFieldError(name, raw)
    return parsed


def _text(fields: Mapping[str, Any], name: str) -> str:
    raw = fields.get(name)
    return str(raw).strip() if raw is not None else ""


def attributes_from_form(
    fields: Mapping[str, Any],
    city: str = "",
    strict: bool = False,
) -> PropertyAttributes:
    """Build PropertyAttributes from raw form fields.

    Recognized keys: ``type`` (or ``property_type``), ``neighborhood``, ``city``,
    ``interior_area``, ``exterior_area``, ``bedrooms``, ``suites``,
    ``parking_spots``, ``conservation_state``, ``has_pool``, ``has_gym``,
    ``year_built``. *city* is used when the fields carry none.
    """
    property_type = _text(fields, "type") or _text(fields, "property_type")
    counts = {
        name: max(0, _field(fields, name, parse_int, strict) or 0)
        for name in ("bedrooms", "suites", "parking_spots")
    }
    exterior = _field(fields, "exterior_area", parse_float, strict)
    return PropertyAttributes(
        property_type=property_type,
        neighborhood=_text(fields, "neighborhood"),
        city=_text(fields, "city") or city,
        interior_area=_field(fields, "interior_area", parse_float, strict),
        exterior_area=max(0.0, exterior or 0.0),
        bedrooms=counts["bedrooms"],
        suites=counts["suites"],
        parking_spots=counts["parking_spots"],
        conservation_state=_text(fields, "conservation_state") or None,
        has_pool=parse_bool(fields.get("has_pool")),
        has_gym=parse_bool(fields.get("has_gym")),
        year_built=_field(fields, "year_built", parse_int, strict),
    )
