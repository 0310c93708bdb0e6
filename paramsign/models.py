from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class SignRequest(BaseModel):
    params: Dict[str, Any] = Field(default_factory=dict)


class SignResponse(BaseModel):
    signature: str
    algorithm: str
    signature_key: str


class VerifyRequest(BaseModel):
    params: Dict[str, Any] = Field(default_factory=dict)
    signature: Optional[str] = None


class VerifyResponse(BaseModel):
    valid: bool
