'''
    RSA key management

    Loads RSA keys from PEM text. Public keys may arrive either as a bare
    SubjectPublicKeyInfo block or wrapped in an X.509 certificate, which is
    how the recipient's encryption key is usually distributed.
'''

from __future__ import annotations

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

PEM_CERTIFICATE = b"-----BEGIN CERTIFICATE-----"
PEM_PUBLIC_KEY = b"-----BEGIN PUBLIC KEY-----"
PEM_RSA_PUBLIC_KEY = b"-----BEGIN RSA PUBLIC KEY-----"


def _as_bytes(pem_or_str) -> bytes:
    return pem_or_str.encode("utf-8") if isinstance(pem_or_str, str) else pem_or_str


def is_public_pem(pem: bytes | str) -> bool:
    data = _as_bytes(pem)
    return any(marker in data for marker in (PEM_CERTIFICATE, PEM_PUBLIC_KEY, PEM_RSA_PUBLIC_KEY))


def load_public_key(public_pem_or_obj) -> RSAPublicKey:
    if isinstance(public_pem_or_obj, RSAPublicKey):
        return public_pem_or_obj
    data = _as_bytes(public_pem_or_obj)
    if PEM_CERTIFICATE in data:
        key = x509.load_pem_x509_certificate(data).public_key()
    else:
        key = serialization.load_pem_public_key(data)
    if not isinstance(key, RSAPublicKey):
        raise TypeError(f"expected an RSA public key, got {type(key).__name__}")
    return key


def load_private_key(private_pem_or_obj, password: bytes | None = None) -> RSAPrivateKey:
    if isinstance(private_pem_or_obj, RSAPrivateKey):
        return private_pem_or_obj
    key = serialization.load_pem_private_key(_as_bytes(private_pem_or_obj), password=password)
    if not isinstance(key, RSAPrivateKey):
        raise TypeError(f"expected an RSA private key, got {type(key).__name__}")
    return key
