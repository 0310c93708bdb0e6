from __future__ import annotations

import os
from typing import Mapping

from .signing import DEFAULT_ALGORITHM, DEFAULT_SIGNATURE_KEY, SignConfig, SignatureEngine

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_bool(raw: str | None) -> bool:
    if not raw:
        return False
    return raw.strip().lower() in _TRUE_VALUES


def _parse_keys(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(key.strip() for key in raw.split(",") if key.strip())


def load_config(environ: Mapping[str, str] | None = None) -> SignConfig:
    env = os.environ if environ is None else environ
    return SignConfig(
        secret=env.get("PARAMSIGN_SECRET", ""),
        algorithm=env.get("PARAMSIGN_ALGORITHM", DEFAULT_ALGORITHM.value),
        signature_key=env.get("PARAMSIGN_SIGNATURE_KEY", DEFAULT_SIGNATURE_KEY),
        ignored_keys=_parse_keys(env.get("PARAMSIGN_IGNORED_KEYS")),
        upper_case=_parse_bool(env.get("PARAMSIGN_UPPERCASE")),
    )


def build_engine(environ: Mapping[str, str] | None = None) -> SignatureEngine:
    return SignatureEngine(load_config(environ))
