"""Issue signed-then-encrypted tokens."""

from __future__ import annotations

import logging
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm

from .claims import ClaimSet, TimeValue, current_time, validate_claims
from .codec import encode_encrypted, encode_protected_header, encode_signed, signing_input
from .crypto import (
    CONTENT_ENCRYPTION_KEY_SIZES,
    RSA_OAEP_256,
    aesgcm_encrypt,
    new_content_key,
    new_iv,
)
from .errors import EncryptionError, SigningError
from .keys import KeyMaterial

logger = logging.getLogger(__name__)

A256GCM = "A256GCM"
CONTENT_TYPE_JWT = "JWT"


def signed_header(signing_key: KeyMaterial) -> dict:
    header = {"alg": signing_key.algorithm}
    if signing_key.key_id:
        header["kid"] = signing_key.key_id
    return header


def sign_claims(signing_key: KeyMaterial, claims: ClaimSet) -> str:
    """Validate ``claims`` and return the compact signed token (the inner layer)."""
    claims = validate_claims(claims)
    header = signed_header(signing_key)
    try:
        signature = signing_key.sign(signing_input(header, claims))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningError(
            "signing key cannot produce a signature",
            {"alg": header["alg"], "reason": type(exc).__name__},
        ) from exc
    return encode_signed(header, claims, signature)


def encrypt_token(encryption_key: KeyMaterial, signed_token: str, enc: str = A256GCM) -> str:
    """Wrap ``signed_token`` in a compact encrypted envelope (the outer layer)."""
    if enc not in CONTENT_ENCRYPTION_KEY_SIZES:
        raise EncryptionError("unsupported content encryption", {"enc": enc})
    header = {"alg": RSA_OAEP_256, "enc": enc, "cty": CONTENT_TYPE_JWT}
    protected = encode_protected_header(header)

    # fresh per call, never cached
    cek = new_content_key(enc)
    iv = new_iv()
    try:
        ciphertext, tag = aesgcm_encrypt(cek, iv, signed_token.encode("ascii"), protected.encode("ascii"))
        encrypted_key = encryption_key.encrypt(cek)
    except (ValueError, TypeError, OverflowError, UnsupportedAlgorithm) as exc:
        raise EncryptionError(
            "cannot encrypt token",
            {"alg": RSA_OAEP_256, "enc": enc, "reason": type(exc).__name__},
        ) from exc
    return encode_encrypted(header, encrypted_key, iv, ciphertext, tag)


def issue(
    signing_key: KeyMaterial,
    encryption_key: KeyMaterial,
    claims: ClaimSet,
    now: Optional[TimeValue] = None,
    *,
    enc: str = A256GCM,
) -> str:
    """Sign ``claims`` with ``signing_key``, then encrypt the signed token for ``encryption_key``.

    The signature covers the unencrypted canonical claims so the receiver can
    check it straight after decryption.
    """
    issued_at = current_time(now)
    signed_token = sign_claims(signing_key, claims)
    envelope = encrypt_token(encryption_key, signed_token, enc)
    logger.debug(
        "issued token alg=%s kid=%s enc=%s at=%s",
        signing_key.algorithm, signing_key.key_id, enc, issued_at,
    )
    return envelope
