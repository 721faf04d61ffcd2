"""Signed-then-encrypted JWT issuance (RS256 inside RSA-OAEP-256 / A256GCM) and verification."""

from .claims import ClaimSet, build_claims, check_time_window, validate_claims
from .codec import (
    EncryptedEnvelope,
    SignedToken,
    decode_encrypted,
    decode_signed,
    encode_encrypted,
    encode_signed,
)
from .errors import (
    DecryptionError,
    EncryptionError,
    IntegrityError,
    InvalidClaims,
    KeyLoadError,
    KeyUsageError,
    MalformedToken,
    SignatureInvalid,
    SigningError,
    TokenError,
    TokenExpired,
    TokenNotYetValid,
)
from .issuer import issue
from .keys import KeyMaterial, RSAKeyMaterial, load_key
from .verifier import verify

__all__ = [
    "issue", "verify",
    "KeyMaterial", "RSAKeyMaterial", "load_key",
    "ClaimSet", "build_claims", "validate_claims", "check_time_window",
    "SignedToken", "EncryptedEnvelope",
    "encode_signed", "decode_signed", "encode_encrypted", "decode_encrypted",
    "TokenError", "InvalidClaims", "SigningError", "EncryptionError", "MalformedToken",
    "DecryptionError", "IntegrityError", "SignatureInvalid", "TokenExpired", "TokenNotYetValid",
    "KeyLoadError", "KeyUsageError",
]
