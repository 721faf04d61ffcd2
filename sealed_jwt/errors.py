"""
Errors raised while issuing or verifying tokens.

Every error names the pipeline step that failed. ``details`` only ever
holds non-secret context (claim names, algorithm identifiers, sizes);
claim values, key material and plaintext never go into an error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TokenError(Exception):
    """Base exception for token issuance and verification."""

    code = "TOKEN_ERROR"
    step = "token"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, *, step: Optional[str] = None):
        self.message = message
        self.details = details or {}
        if step is not None:
            self.step = step
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "step": self.step,
            "message": self.message,
            "details": self.details,
        }


class InvalidClaims(TokenError):
    code = "INVALID_CLAIMS"
    step = "validate_claims"


class SigningError(TokenError):
    code = "SIGNING_ERROR"
    step = "sign"


class EncryptionError(TokenError):
    code = "ENCRYPTION_ERROR"
    step = "encrypt"


class MalformedToken(TokenError):
    code = "MALFORMED_TOKEN"
    step = "decode"


class DecryptionError(TokenError):
    code = "DECRYPTION_ERROR"
    step = "unwrap_key"


class IntegrityError(TokenError):
    code = "INTEGRITY_ERROR"
    step = "decrypt"


class SignatureInvalid(TokenError):
    code = "SIGNATURE_INVALID"
    step = "verify_signature"


class TokenExpired(TokenError):
    code = "TOKEN_EXPIRED"
    step = "check_time"


class TokenNotYetValid(TokenError):
    code = "TOKEN_NOT_YET_VALID"
    step = "check_time"


class KeyLoadError(Exception):
    """Raised when a PEM key or certificate cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)


class KeyUsageError(ValueError):
    """Raised when a key lacks the capability an operation needs (e.g. signing with a public key)."""
