from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

RS256 = "RS256"
PS256 = "PS256"

SIGNING_ALGORITHMS = (RS256, PS256)


def _padding_for(algorithm: str) -> padding.AsymmetricPadding:
    if algorithm == RS256:
        return padding.PKCS1v15()
    if algorithm == PS256:
        # RFC 7518 3.5: salt length equals the hash output length
        return padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=32)
    raise ValueError(f"unsupported signing algorithm {algorithm!r}")


def rsa_sign(private_key: RSAPrivateKey, message: bytes, algorithm: str = RS256) -> bytes:
    """
    RSASSA signature over SHA-256 (PKCS#1 v1.5 for RS256, PSS for PS256).
    """
    return private_key.sign(message, _padding_for(algorithm), hashes.SHA256())


def rsa_verify(public_key: RSAPublicKey, message: bytes, signature: bytes, algorithm: str = RS256) -> bool:
    """
    Returns True if signature is valid for message under algorithm.
    """
    try:
        public_key.verify(signature, message, _padding_for(algorithm), hashes.SHA256())
        return True
    except InvalidSignature:
        return False
