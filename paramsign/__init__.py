from __future__ import annotations

from .canonical import build_canonical_string, coerce_value
from .errors import (
    InvalidSignatureTypeError,
    MissingSignatureError,
    SignatureError,
    UnsupportedAlgorithmError,
)
from .signing import DIGESTS, SignAlgorithm, SignConfig, SignatureEngine

__all__ = [
    "DIGESTS",
    "InvalidSignatureTypeError",
    "MissingSignatureError",
    "SignAlgorithm",
    "SignConfig",
    "SignatureEngine",
    "SignatureError",
    "UnsupportedAlgorithmError",
    "build_canonical_string",
    "coerce_value",
]
