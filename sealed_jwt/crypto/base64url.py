'''
    BASE64URL functionality (RFC 4648 section 5, no padding)

    Both token layers use unpadded base64url for every segment.
    Decoding is strict: characters outside the url-safe alphabet and
    impossible lengths raise ValueError instead of being skipped.
'''

# ========== Imports ==========
import base64
import binascii
import re

_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")


# ========== Base64 URL Encoding ==========
def base64url_encode(raw_url: bytes) -> str:
    postp = base64.urlsafe_b64encode(raw_url).decode("ascii")
    return postp.rstrip("=")


# ========== Base64 URL Decoding ==========
def base64url_decode(postp_url: str) -> bytes:
    if not isinstance(postp_url, str) or not _ALPHABET.match(postp_url):
        raise ValueError("not a base64url string")
    remainder = len(postp_url) % 4
    if remainder == 1:
        raise ValueError("invalid base64url length")
    missing = (-remainder) % 4    # how many chars needed to reach multiple of 4
    try:
        return base64.urlsafe_b64decode(postp_url + "=" * missing)
    except binascii.Error as exc:
        raise ValueError("invalid base64url data") from exc
