"""
Compact serialization of the two token layers.

Signed tokens are ``header.claims.signature`` (JWS compact form) and
encrypted envelopes are ``header.encrypted_key.iv.ciphertext.tag`` (JWE
compact form). Every segment is unpadded base64url; JSON segments are
written canonically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .crypto import base64url_decode, base64url_encode, parse_json_object, stabilise_json
from .errors import MalformedToken

SIGNED_SEGMENTS = 3
ENCRYPTED_SEGMENTS = 5


@dataclass(frozen=True)
class SignedToken:
    header: Dict[str, Any]
    claims: Dict[str, Any]
    signature: bytes
    signing_input: bytes


@dataclass(frozen=True)
class EncryptedEnvelope:
    header: Dict[str, Any]
    encrypted_key: bytes
    iv: bytes
    ciphertext: bytes
    tag: bytes
    protected: str

    @property
    def aad(self) -> bytes:
        """Additional authenticated data: the protected header segment as sent."""
        return self.protected.encode("ascii")


def _json_segment(obj: Mapping[str, Any]) -> str:
    return base64url_encode(stabilise_json(obj))


def _split(token: Any, expected: int, kind: str) -> List[str]:
    if not isinstance(token, str):
        raise MalformedToken(f"{kind} must be a string", {"type": type(token).__name__})
    parts = token.split(".")
    if len(parts) != expected:
        raise MalformedToken(
            f"{kind} must have {expected} segments",
            {"segments": len(parts), "expected": expected},
        )
    return parts


def _decode_segment(segment: str, index: int, kind: str) -> bytes:
    try:
        return base64url_decode(segment)
    except ValueError as exc:
        raise MalformedToken(f"{kind} segment {index} is not base64url", {"segment": index}) from exc


def _decode_json_segment(segment: str, index: int, kind: str) -> Dict[str, Any]:
    raw = _decode_segment(segment, index, kind)
    try:
        return parse_json_object(raw)
    except (ValueError, RecursionError) as exc:
        raise MalformedToken(f"{kind} segment {index} is not a JSON object", {"segment": index}) from exc


# ========== Signed (JWS compact) ==========

def signing_input(header: Mapping[str, Any], claims: Mapping[str, Any]) -> bytes:
    return f"{_json_segment(header)}.{_json_segment(claims)}".encode("ascii")


def encode_signed(header: Mapping[str, Any], claims: Mapping[str, Any], signature: bytes) -> str:
    return f"{signing_input(header, claims).decode('ascii')}.{base64url_encode(signature)}"


def decode_signed(token: str) -> SignedToken:
    kind = "signed token"
    header_b64, claims_b64, sig_b64 = _split(token, SIGNED_SEGMENTS, kind)
    header = _decode_json_segment(header_b64, 0, kind)
    claims = _decode_json_segment(claims_b64, 1, kind)
    signature = _decode_segment(sig_b64, 2, kind)
    return SignedToken(
        header=header,
        claims=claims,
        signature=signature,
        signing_input=f"{header_b64}.{claims_b64}".encode("ascii"),
    )


# ========== Encrypted (JWE compact) ==========

def encode_protected_header(header: Mapping[str, Any]) -> str:
    return _json_segment(header)


def encode_encrypted(
    header: Mapping[str, Any],
    encrypted_key: bytes,
    iv: bytes,
    ciphertext: bytes,
    tag: bytes,
) -> str:
    return ".".join(
        [encode_protected_header(header)]
        + [base64url_encode(part) for part in (encrypted_key, iv, ciphertext, tag)]
    )


def decode_encrypted(token: str) -> EncryptedEnvelope:
    kind = "encrypted envelope"
    parts = _split(token, ENCRYPTED_SEGMENTS, kind)
    header = _decode_json_segment(parts[0], 0, kind)
    encrypted_key, iv, ciphertext, tag = (
        _decode_segment(segment, index, kind) for index, segment in enumerate(parts[1:], start=1)
    )
    return EncryptedEnvelope(
        header=header,
        encrypted_key=encrypted_key,
        iv=iv,
        ciphertext=ciphertext,
        tag=tag,
        protected=parts[0],
    )
