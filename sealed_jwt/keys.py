"""
Key material used by the issuer and the verifier.

The core only relies on the ``KeyMaterial`` capabilities; ``RSAKeyMaterial``
is the implementation backed by ``cryptography`` RSA keys, and ``load_key``
is the PEM file loader callers use to obtain one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from .crypto import (
    RS256,
    SIGNING_ALGORITHMS,
    is_public_pem,
    load_private_key,
    load_public_key,
    oaep_decrypt,
    oaep_encrypt,
    rsa_sign,
    rsa_verify,
)
from .errors import KeyLoadError, KeyUsageError

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyMaterial(Protocol):
    key_id: Optional[str]
    algorithm: str

    def sign(self, message: bytes) -> bytes: ...

    def verify(self, message: bytes, signature: bytes) -> bool: ...

    def encrypt(self, plaintext: bytes) -> bytes: ...

    def decrypt(self, ciphertext: bytes) -> bytes: ...


class RSAKeyMaterial:
    """An RSA key pair, or just its public half.

    Signing and decryption need the private key; verification and
    encryption work with either.
    """

    def __init__(
        self,
        private_key: Optional[RSAPrivateKey] = None,
        public_key: Optional[RSAPublicKey] = None,
        *,
        key_id: Optional[str] = None,
        algorithm: str = RS256,
    ) -> None:
        if private_key is None and public_key is None:
            raise ValueError("RSAKeyMaterial needs a private or a public key")
        if algorithm not in SIGNING_ALGORITHMS:
            raise ValueError(f"unsupported signing algorithm {algorithm!r}")
        self._private = private_key
        self._public = public_key if public_key is not None else private_key.public_key()
        self.key_id = key_id
        self.algorithm = algorithm

    @classmethod
    def from_pem(
        cls,
        data: Union[bytes, str],
        *,
        key_id: Optional[str] = None,
        algorithm: str = RS256,
        password: Optional[bytes] = None,
    ) -> "RSAKeyMaterial":
        if is_public_pem(data):
            return cls(public_key=load_public_key(data), key_id=key_id, algorithm=algorithm)
        return cls(private_key=load_private_key(data, password), key_id=key_id, algorithm=algorithm)

    @property
    def has_private_key(self) -> bool:
        return self._private is not None

    @property
    def key_size(self) -> int:
        return self._public.key_size

    def public(self) -> "RSAKeyMaterial":
        """The public half only, keeping key id and algorithm."""
        return RSAKeyMaterial(public_key=self._public, key_id=self.key_id, algorithm=self.algorithm)

    def sign(self, message: bytes) -> bytes:
        if self._private is None:
            raise KeyUsageError("cannot sign with a public key")
        return rsa_sign(self._private, message, self.algorithm)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return rsa_verify(self._public, message, signature, self.algorithm)

    def encrypt(self, plaintext: bytes) -> bytes:
        return oaep_encrypt(self._public, plaintext)

    def decrypt(self, ciphertext: bytes) -> bytes:
        if self._private is None:
            raise KeyUsageError("cannot decrypt with a public key")
        return oaep_decrypt(self._private, ciphertext)

    def __repr__(self) -> str:
        kind = "private" if self._private is not None else "public"
        return f"RSAKeyMaterial({kind}, {self.key_size} bits, alg={self.algorithm}, kid={self.key_id!r})"


def load_key(
    path: Union[str, Path],
    *,
    key_id: Optional[str] = None,
    algorithm: str = RS256,
    password: Optional[Union[bytes, str]] = None,
) -> RSAKeyMaterial:
    """Read a PEM private key, public key or X.509 certificate from ``path``."""
    path = Path(path)
    if isinstance(password, str):
        password = password.encode("utf-8")
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise KeyLoadError(f"cannot read key file ({exc.strerror})", str(path)) from exc
    try:
        key = RSAKeyMaterial.from_pem(data, key_id=key_id, algorithm=algorithm, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyLoadError("not a usable RSA PEM key or certificate", str(path)) from exc
    logger.debug("loaded %r from %s", key, path)
    return key
