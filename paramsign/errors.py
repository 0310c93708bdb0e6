from __future__ import annotations


class SignatureError(ValueError):
    pass


class UnsupportedAlgorithmError(SignatureError):
    def __init__(self, algorithm: object) -> None:
        super().__init__(f"unsupported signature algorithm: {algorithm}")
        self.algorithm = algorithm


class MissingSignatureError(SignatureError):
    def __init__(self, key: str) -> None:
        super().__init__(f"signature parameter '{key}' is missing")
        self.key = key


class InvalidSignatureTypeError(SignatureError):
    def __init__(self, key: str, value: object) -> None:
        self.value_type = type(value).__name__
        super().__init__(f"signature parameter '{key}' must be a string, got {self.value_type}")
        self.key = key
