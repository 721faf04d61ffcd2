import pytest

from sealed_jwt.codec import (
    decode_encrypted,
    decode_signed,
    encode_encrypted,
    encode_signed,
    signing_input,
)
from sealed_jwt.crypto import base64url_encode
from sealed_jwt.errors import MalformedToken

HEADER = {"alg": "RS256", "kid": "k1"}
CLAIMS = {"sub": "john.doe@acme.com", "aud": "rev"}


def test_encode_signed_layout():
    token = encode_signed(HEADER, CLAIMS, b"\x01\x02\x03")
    head, body, sig = token.split(".")
    assert head == base64url_encode(b'{"alg":"RS256","kid":"k1"}')
    assert body == base64url_encode(b'{"aud":"rev","sub":"john.doe@acme.com"}')
    assert sig == "AQID"
    assert "=" not in token


def test_signed_roundtrip_keeps_signing_input():
    token = encode_signed(HEADER, CLAIMS, b"sig")
    signed = decode_signed(token)
    assert signed.header == HEADER
    assert signed.claims == CLAIMS
    assert signed.signature == b"sig"
    assert signed.signing_input == signing_input(HEADER, CLAIMS)


def test_signing_input_ignores_insertion_order():
    reordered = {"aud": "rev", "sub": "john.doe@acme.com"}
    assert signing_input(HEADER, CLAIMS) == signing_input(dict(reversed(HEADER.items())), reordered)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "a.b",
        "a.b.c.d",
        "e30.e30.###",
        base64url_encode(b"[]") + ".e30.AA",
        "e30." + base64url_encode(b"not json") + ".AA",
        base64url_encode(b"[" * 100_000) + ".e30.AA",
        "e30." + base64url_encode(b"{\"a\":" * 100_000) + ".AA",
    ],
)
def test_decode_signed_malformed(token):
    with pytest.raises(MalformedToken):
        decode_signed(token)


def test_encrypted_roundtrip():
    header = {"alg": "RSA-OAEP-256", "enc": "A256GCM", "cty": "JWT"}
    token = encode_encrypted(header, b"key", b"iv" * 6, b"ciphertext", b"t" * 16)
    assert token.count(".") == 4
    env = decode_encrypted(token)
    assert env.header == header
    assert (env.encrypted_key, env.iv, env.ciphertext, env.tag) == (b"key", b"iv" * 6, b"ciphertext", b"t" * 16)
    assert env.aad == token.split(".")[0].encode("ascii")


@pytest.mark.parametrize("token", ["", "a.b.c", "a.b.c.d", "a.b.c.d.e.f", "e30.a.b.c.d=", "e30..!.."])
def test_decode_encrypted_malformed(token):
    with pytest.raises(MalformedToken) as info:
        decode_encrypted(token)
    assert info.value.code == "MALFORMED_TOKEN"


@pytest.mark.parametrize("value", [None, 42, b"a.b.c.d.e"])
def test_decode_encrypted_non_string(value):
    with pytest.raises(MalformedToken):
        decode_encrypted(value)
