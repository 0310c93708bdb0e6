from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Collection, Mapping

from .canonical import build_canonical_string, filter_params
from .errors import InvalidSignatureTypeError, MissingSignatureError, UnsupportedAlgorithmError

DEFAULT_SIGNATURE_KEY = "sign"


class SignAlgorithm(str, Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    HMAC_MD5 = "hmac_md5"
    HMAC_SHA1 = "hmac_sha1"
    HMAC_SHA256 = "hmac_sha256"


DEFAULT_ALGORITHM = SignAlgorithm.SHA256


@dataclass(frozen=True)
class DigestSpec:
    hash_factory: Callable[..., Any]
    keyed: bool

    def digest(self, data: bytes, secret: str) -> bytes:
        if self.keyed:
            return hmac.new(secret.encode("utf-8"), data, self.hash_factory).digest()
        return self.hash_factory(data).digest()


DIGESTS: Mapping[SignAlgorithm, DigestSpec] = {
    SignAlgorithm.MD5: DigestSpec(hashlib.md5, keyed=False),
    SignAlgorithm.SHA1: DigestSpec(hashlib.sha1, keyed=False),
    SignAlgorithm.SHA256: DigestSpec(hashlib.sha256, keyed=False),
    SignAlgorithm.HMAC_MD5: DigestSpec(hashlib.md5, keyed=True),
    SignAlgorithm.HMAC_SHA1: DigestSpec(hashlib.sha1, keyed=True),
    SignAlgorithm.HMAC_SHA256: DigestSpec(hashlib.sha256, keyed=True),
}


def resolve_algorithm(value: SignAlgorithm | str | None) -> SignAlgorithm | str:
    """Map a configured algorithm name onto :class:`SignAlgorithm`.

    Empty values fall back to SHA-256. Unknown names are returned unchanged so
    the error surfaces when a signature is generated.
    """
    if isinstance(value, SignAlgorithm):
        return value
    if not value:
        return DEFAULT_ALGORITHM
    normalized = str(value).strip().lower().replace("-", "_")
    try:
        return SignAlgorithm(normalized)
    except ValueError:
        return value


@dataclass(frozen=True)
class SignConfig:
    secret: str = ""
    algorithm: SignAlgorithm | str | None = DEFAULT_ALGORITHM
    signature_key: str = DEFAULT_SIGNATURE_KEY
    ignored_keys: Collection[str] = ()
    upper_case: bool = False


class SignatureEngine:
    """Signs and verifies parameter sets with a fixed configuration.

    The engine keeps no per-call state, so one instance can be shared across
    threads as long as each call passes its own mapping.
    """

    def __init__(self, config: SignConfig | None = None) -> None:
        config = config or SignConfig()
        ignored_keys = config.ignored_keys or ()
        if isinstance(ignored_keys, str):
            ignored_keys = (ignored_keys,)
        self.config = replace(
            config,
            secret=config.secret or "",
            algorithm=resolve_algorithm(config.algorithm),
            signature_key=config.signature_key or DEFAULT_SIGNATURE_KEY,
            ignored_keys=frozenset(ignored_keys),
        )

    @property
    def signature_key(self) -> str:
        return self.config.signature_key

    def canonical_string(self, params: Mapping[str, object]) -> str:
        excluded = (self.config.signature_key, *self.config.ignored_keys)
        working = filter_params(params, excluded)
        return build_canonical_string(working, self.config.secret)

    def generate_signature(self, params: Mapping[str, object]) -> str:
        canonical = self.canonical_string(params)
        spec = DIGESTS.get(self.config.algorithm)
        if spec is None:
            raise UnsupportedAlgorithmError(self.config.algorithm)
        signature = spec.digest(canonical.encode("utf-8"), self.config.secret).hex()
        return signature.upper() if self.config.upper_case else signature.lower()

    def sign(self, params: Mapping[str, object]) -> dict[str, object]:
        signed = dict(params)
        signed[self.config.signature_key] = self.generate_signature(params)
        return signed

    def validate(self, params: Mapping[str, object], signature: str) -> bool:
        return self.generate_signature(params) == signature

    def validate_with_signature_in_params(self, params: Mapping[str, object]) -> bool:
        key = self.config.signature_key
        if key not in params:
            raise MissingSignatureError(key)
        signature = params[key]
        if not isinstance(signature, str):
            raise InvalidSignatureTypeError(key, signature)
        return self.validate(params, signature)
