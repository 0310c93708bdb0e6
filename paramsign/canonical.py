"""Canonical string construction for signed parameter sets.

Parameters are rendered as ``key=value`` pairs in ascending key order and
joined with ``&``. Values are coerced to strings by a fixed, ordered set of
rules so that every signer produces the same bytes for the same input.

Structured values are written as compact JSON with sorted object keys.
``&``, ``<``, ``>``, U+2028 and U+2029 are escaped as ``\\uXXXX``; floats use
their shortest form with no trailing ``.0``, switching to exponent form
(``1e+21``, ``1e-7``) outside ``[1e-6, 1e21)``.
"""
from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Callable, Iterable, Mapping

SECRET_SEGMENT_KEY = "key"

_HTML_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _coerce_str(value: str) -> str:
    return value


def _coerce_bool(value: bool) -> str:
    return "true" if value else "false"


def _coerce_int(value: int) -> str:
    return str(value)


def _coerce_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.6f}"


def _coerce_none(_value: None) -> str:
    return ""


def _json_string(value: str) -> str:
    encoded = json.dumps(value, ensure_ascii=False)
    for char, escape in _HTML_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded


def _json_float(value: float) -> str:
    if not math.isfinite(value):
        raise ValueError(f"unsupported float value: {value!r}")
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        # repr() is in exponent form here; the exponent carries no leading zero.
        mantissa, _, exponent = repr(value).partition("e")
        sign, digits = exponent[0], exponent[1:].lstrip("0")
        return f"{mantissa}e{sign}{digits}"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _json_key(key: object) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise TypeError(f"unsupported object key: {key!r}")


def _to_json(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return _json_string(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _json_float(value)
    if isinstance(value, Mapping):
        items = sorted(((_json_key(key), item) for key, item in value.items()), key=lambda pair: pair[0])
        return "{" + ",".join(f"{_json_string(key)}:{_to_json(item)}" for key, item in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_to_json(item) for item in value) + "]"
    raise TypeError(f"unsupported JSON value: {type(value).__name__}")


def _coerce_structured(value: object) -> str:
    try:
        return _to_json(value)
    except (TypeError, ValueError):
        return str(value)


# bool must precede int: bool is an int subclass.
_COERCERS: tuple[tuple[type, Callable[[object], str]], ...] = (
    (str, _coerce_str),
    (bool, _coerce_bool),
    (int, _coerce_int),
    (float, _coerce_float),
    (type(None), _coerce_none),
)


def coerce_value(value: object) -> str:
    """Render a parameter value as it appears in the canonical string.

    Strings pass through, booleans become ``true``/``false``, integers are
    base-10, floats carry exactly six decimals, ``None`` is empty and any
    structured value is compact JSON with sorted object keys.
    """
    for value_type, coercer in _COERCERS:
        if isinstance(value, value_type):
            return coercer(value)
    return _coerce_structured(value)


def filter_params(params: Mapping[str, object], excluded: Iterable[str]) -> dict[str, object]:
    working = dict(params)
    for key in excluded:
        working.pop(key, None)
    return working


def build_canonical_string(params: Mapping[str, object], secret: str = "") -> str:
    canonical = "&".join(f"{key}={coerce_value(params[key])}" for key in sorted(params))
    if secret:
        canonical += f"&{SECRET_SEGMENT_KEY}={secret}"
    return canonical
