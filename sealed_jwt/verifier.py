"""Verify tokens produced by the issuer: decrypt, authenticate, check signature and time window."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm

from .claims import TimeValue, check_time_window
from .codec import EncryptedEnvelope, decode_encrypted, decode_signed, signing_input
from .crypto import CONTENT_ENCRYPTION_KEY_SIZES, RSA_OAEP_256, aesgcm_decrypt
from .crypto.aes_gcm import IV_SIZE, TAG_SIZE
from .errors import DecryptionError, IntegrityError, MalformedToken, SignatureInvalid, TokenError
from .keys import KeyMaterial

logger = logging.getLogger(__name__)


def _describe(value: Any) -> str:
    return value if isinstance(value, str) else type(value).__name__


def _check_envelope_header(envelope: EncryptedEnvelope) -> str:
    alg = envelope.header.get("alg")
    enc = envelope.header.get("enc")
    if not isinstance(alg, str) or alg != RSA_OAEP_256:
        raise MalformedToken("unsupported key management algorithm", {"alg": _describe(alg)})
    if not isinstance(enc, str) or enc not in CONTENT_ENCRYPTION_KEY_SIZES:
        raise MalformedToken("unsupported content encryption", {"enc": _describe(enc)})
    return enc


def decrypt_envelope(decryption_key: KeyMaterial, envelope: EncryptedEnvelope) -> str:
    """Unwrap the content key and return the authenticated plaintext (the signed token)."""
    enc = _check_envelope_header(envelope)
    try:
        cek = decryption_key.decrypt(envelope.encrypted_key)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise DecryptionError("cannot unwrap content encryption key", {"reason": type(exc).__name__}) from exc
    if len(cek) != CONTENT_ENCRYPTION_KEY_SIZES[enc]:
        raise DecryptionError("content encryption key has the wrong size", {"enc": enc})

    if len(envelope.iv) != IV_SIZE or len(envelope.tag) != TAG_SIZE:
        raise IntegrityError("initialization vector or tag has the wrong size")
    try:
        plaintext = aesgcm_decrypt(cek, envelope.iv, envelope.ciphertext, envelope.tag, envelope.aad)
    except InvalidTag as exc:
        raise IntegrityError("authentication tag mismatch") from exc

    try:
        return plaintext.decode("ascii")
    except UnicodeDecodeError as exc:
        raise MalformedToken("decrypted payload is not a compact token", step="decode_signed") from exc


def verify_signed(verification_key: KeyMaterial, token: str) -> Dict[str, Any]:
    """Check the inner signed token and return its claims."""
    try:
        signed = decode_signed(token)
    except MalformedToken as exc:
        exc.step = "decode_signed"
        raise
    alg = signed.header.get("alg")
    if alg != verification_key.algorithm:
        raise SignatureInvalid(
            "signature algorithm does not match the verification key",
            {"alg": str(alg), "expected": verification_key.algorithm},
        )
    # recomputed from the decoded values, so only canonical tokens verify
    message = signing_input(signed.header, signed.claims)
    try:
        valid = verification_key.verify(message, signed.signature)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SignatureInvalid("verification key cannot check the signature", {"alg": alg}) from exc
    if not valid:
        raise SignatureInvalid("signature mismatch", {"alg": alg, "kid": signed.header.get("kid")})
    return signed.claims


def verify(
    decryption_key: KeyMaterial,
    verification_key: KeyMaterial,
    envelope: str,
    now: Optional[TimeValue] = None,
    *,
    leeway: Union[int, float] = 0,
) -> Dict[str, Any]:
    """Recover the claims from ``envelope``; the reverse of ``issue``."""
    try:
        parsed = decode_encrypted(envelope)
        signed_token = decrypt_envelope(decryption_key, parsed)
        claims = verify_signed(verification_key, signed_token)
        check_time_window(claims, now, leeway)
    except TokenError as exc:
        logger.warning("token verification failed at %s: %s", exc.step, exc.code)
        raise
    logger.debug("verified token kid=%s", verification_key.key_id)
    return dict(claims)
