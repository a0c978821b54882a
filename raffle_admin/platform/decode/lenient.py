"""
Lenient payload decoding.

Backend versions disagree on field names (`total` vs `total_venta`,
`puesto_num` vs `numero_puesto`, ...). Every entity decoder goes through these
helpers with an explicit, ordered list of fallback names instead of repeating
the "try this key, then that one" dance per call site.

Helpers return None when no candidate holds a usable value; they never raise.
"""

import math
import re
from typing import Any, Mapping, Optional, Sequence


_NON_DIGITS = re.compile(r'[^0-9]')
_DECIMAL = re.compile(r'^-?\d+(\.\d{1,2})?$')


def pick(raw: Any, *names: str) -> Any:
    """First non-None value among `names`, or None."""
    if not isinstance(raw, Mapping):
        return None
    for name in names:
        value = raw.get(name)
        if value is not None:
            return value
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(float(text))
        except ValueError:
            return None
    return None


def pick_int(raw: Any, *names: str) -> Optional[int]:
    if not isinstance(raw, Mapping):
        return None
    for name in names:
        value = _as_int(raw.get(name))
        if value is not None:
            return value
    return None


def parse_money(value: Any) -> Optional[int]:
    """
    Money arrives as int, float, numeric string or a formatted string
    (`"$ 35.000"`). Pesos have no fractional part; formatted strings keep only
    their digits.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return round(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # "35000.00" is a serialized decimal; "35.000" / "$ 1.500.000" are es-CO thousands
        if _DECIMAL.match(text):
            return round(float(text))
        digits = _NON_DIGITS.sub('', text)
        sign = -1 if text.startswith('-') else 1
        return sign * int(digits) if digits else None
    return None


def pick_money(raw: Any, *names: str) -> Optional[int]:
    if not isinstance(raw, Mapping):
        return None
    for name in names:
        value = parse_money(raw.get(name))
        if value is not None:
            return value
    return None


def pick_str(raw: Any, *names: str) -> Optional[str]:
    if not isinstance(raw, Mapping):
        return None
    for name in names:
        value = raw.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def pick_bool(raw: Any, *names: str) -> Optional[bool]:
    if not isinstance(raw, Mapping):
        return None
    for name in names:
        value = raw.get(name)
        if isinstance(value, bool):
            return value
    return None


def pick_int_list(raw: Any, *names: str) -> Optional[list[int]]:
    if not isinstance(raw, Mapping):
        return None
    for name in names:
        value = raw.get(name)
        if isinstance(value, list):
            return [n for n in (_as_int(item) for item in value) if n is not None]
    return None


def unwrap_list(raw: Any, *envelope_keys: str) -> Optional[Sequence[Any]]:
    """
    A collection endpoint may answer with a bare array or with `{key: [...]}`.
    Returns None when neither shape matches, so callers can tell "malformed"
    apart from "empty".
    """
    if isinstance(raw, list):
        return raw
    if isinstance(raw, Mapping):
        for key in envelope_keys:
            value = raw.get(key)
            if isinstance(value, list):
                return value
    return None


def stable_negative_id(*parts: Any) -> int:
    """Deterministic negative id for rows the backend sent without one."""
    h = 0
    for ch in '|'.join('' if p is None else str(p) for p in parts):
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    if h == 0:
        h = 1
    return -abs(h)
