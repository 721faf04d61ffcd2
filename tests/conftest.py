import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from sealed_jwt.keys import RSAKeyMaterial

NOW = 1_700_000_000


def _private_pem(key) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _public_pem(key) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _self_signed_cert(key) -> bytes:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "rev-jwt-gen")])
    start = datetime.datetime(2023, 1, 1, tzinfo=datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(start)
        .not_valid_after(start + datetime.timedelta(days=3650))
        .sign(key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def signing_rsa():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def encryption_rsa():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def signing_key(signing_rsa):
    return RSAKeyMaterial(private_key=signing_rsa, key_id="app-key-1")


@pytest.fixture
def verification_key(signing_key):
    return signing_key.public()


@pytest.fixture
def encryption_key(encryption_rsa):
    return RSAKeyMaterial(public_key=encryption_rsa.public_key())


@pytest.fixture
def decryption_key(encryption_rsa):
    return RSAKeyMaterial(private_key=encryption_rsa)


@pytest.fixture
def claims():
    return {
        "iss": "MyApp",
        "aud": "rev",
        "sub": "john.doe@acme.com",
        "exp": NOW + 60,
        "nbf": NOW - 60,
    }


@pytest.fixture
def key_files(tmp_path, signing_rsa, encryption_rsa):
    """PEM files laid out the way the CLI defaults expect them."""
    files = {
        "signing.private.key": _private_pem(signing_rsa),
        "signing.public.key": _public_pem(signing_rsa),
        "encrypt.public.key": _self_signed_cert(encryption_rsa),
        "encrypt.private.key": _private_pem(encryption_rsa),
    }
    for name, data in files.items():
        (tmp_path / name).write_bytes(data)
    return {name: tmp_path / name for name in files}
