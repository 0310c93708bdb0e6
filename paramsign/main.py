from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Request

from .errors import InvalidSignatureTypeError, MissingSignatureError, UnsupportedAlgorithmError
from .models import SignRequest, SignResponse, VerifyRequest, VerifyResponse
from .settings import build_engine
from .signing import SignAlgorithm, SignatureEngine

logger = logging.getLogger("paramsign.api")

app = FastAPI(title="paramsign API", version="0.1.0")
engine = build_engine()


def get_engine() -> SignatureEngine:
    return engine


def _algorithm_name(signer: SignatureEngine) -> str:
    algorithm = signer.config.algorithm
    if isinstance(algorithm, SignAlgorithm):
        return algorithm.value
    return str(algorithm)


def verified_query_params(
    request: Request,
    signer: SignatureEngine = Depends(get_engine),
) -> dict[str, str]:
    params = dict(request.query_params)
    try:
        valid = signer.validate_with_signature_in_params(params)
    except MissingSignatureError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UnsupportedAlgorithmError as exc:
        logger.error("Signature check unavailable: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if not valid:
        logger.warning("Rejected request to %s: signature mismatch", request.url.path)
        raise HTTPException(status_code=401, detail="signature mismatch")
    params.pop(signer.signature_key, None)
    return params


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "time": datetime.now(timezone.utc)}


@app.post("/sign", response_model=SignResponse)
async def sign(payload: SignRequest, signer: SignatureEngine = Depends(get_engine)) -> SignResponse:
    try:
        signature = signer.generate_signature(payload.params)
    except UnsupportedAlgorithmError as exc:
        logger.error("Signing failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return SignResponse(
        signature=signature,
        algorithm=_algorithm_name(signer),
        signature_key=signer.signature_key,
    )


@app.post("/verify", response_model=VerifyResponse)
async def verify(payload: VerifyRequest, signer: SignatureEngine = Depends(get_engine)) -> VerifyResponse:
    try:
        if payload.signature is None:
            valid = signer.validate_with_signature_in_params(payload.params)
        else:
            valid = signer.validate(payload.params, payload.signature)
    except (MissingSignatureError, InvalidSignatureTypeError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UnsupportedAlgorithmError as exc:
        logger.error("Verification failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if not valid:
        logger.warning("Signature mismatch for %d parameter(s)", len(payload.params))
    return VerifyResponse(valid=valid)


@app.get("/echo")
async def echo(params: dict[str, str] = Depends(verified_query_params)) -> dict:
    return {"params": params}
