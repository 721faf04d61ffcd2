from __future__ import annotations

import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

# JWE "enc" value -> content-encryption key length in bytes
CONTENT_ENCRYPTION_KEY_SIZES = {
    "A128GCM": 16,
    "A192GCM": 24,
    "A256GCM": 32,
}

IV_SIZE = 12
TAG_SIZE = 16


def new_content_key(enc: str) -> bytes:
    try:
        size = CONTENT_ENCRYPTION_KEY_SIZES[enc]
    except KeyError:
        raise ValueError(f"unsupported content encryption {enc!r}") from None
    return os.urandom(size)


def new_iv() -> bytes:
    return os.urandom(IV_SIZE)


def aesgcm_encrypt(key: bytes, iv: bytes, plaintext: bytes, aad: bytes = b"") -> tuple[bytes, bytes]:
    """Returns (ciphertext, tag); AESGCM appends the tag to its output."""
    sealed = AESGCM(key).encrypt(iv, plaintext, aad)
    return sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]


def aesgcm_decrypt(key: bytes, iv: bytes, ciphertext: bytes, tag: bytes, aad: bytes = b"") -> bytes:
    """Raises cryptography.exceptions.InvalidTag when authentication fails."""
    return AESGCM(key).decrypt(iv, ciphertext + tag, aad)
