from __future__ import annotations

import logging
from typing import Mapping

import httpx

from .canonical import coerce_value
from .signing import SignatureEngine

logger = logging.getLogger("paramsign.client")

DEFAULT_TIMEOUT_SECONDS = 10.0


class SignedClient:
    """httpx client that attaches a signature to every outgoing parameter set."""

    def __init__(
        self,
        engine: SignatureEngine,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.engine = engine
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "SignedClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _signed(self, method: str, path: str, params: Mapping[str, object]) -> dict[str, object]:
        signed = self.engine.sign(params)
        logger.debug("Signed %s %s with %d parameter(s)", method, path, len(params))
        return signed

    def get(self, path: str, params: Mapping[str, object] | None = None) -> httpx.Response:
        signed = self._signed("GET", path, params or {})
        response = self._client.get(path, params=_query_values(signed))
        response.raise_for_status()
        return response

    def post_form(self, path: str, data: Mapping[str, object] | None = None) -> httpx.Response:
        signed = self._signed("POST", path, data or {})
        response = self._client.post(path, data=_query_values(signed))
        response.raise_for_status()
        return response

    def post_json(self, path: str, payload: Mapping[str, object] | None = None) -> httpx.Response:
        signed = self._signed("POST", path, payload or {})
        response = self._client.post(path, json=signed)
        response.raise_for_status()
        return response


def _query_values(params: Mapping[str, object]) -> dict[str, str]:
    # Query strings and form bodies carry text; values go out in canonical form.
    return {key: coerce_value(value) for key, value in params.items()}
