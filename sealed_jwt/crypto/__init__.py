'''
    Cryptographic building blocks for the token layers: base64url
    encoding, canonical JSON, RSA key loading, RS256/PS256 signatures,
    RSA-OAEP-256 key wrapping and AES-GCM content encryption.
'''

from .aes_gcm import CONTENT_ENCRYPTION_KEY_SIZES, aesgcm_decrypt, aesgcm_encrypt, new_content_key, new_iv
from .base64url import base64url_decode, base64url_encode
from .json_format import parse_json_object, stabilise_json
from .rsa_key_management import is_public_pem, load_private_key, load_public_key
from .rsa_oaep import RSA_OAEP_256, oaep_decrypt, oaep_encrypt, oaep_max_plaintext_len
from .rsa_sign import PS256, RS256, SIGNING_ALGORITHMS, rsa_sign, rsa_verify

__all__ = [
    "base64url_encode", "base64url_decode",
    "stabilise_json", "parse_json_object",
    "load_public_key", "load_private_key", "is_public_pem",
    "oaep_encrypt", "oaep_decrypt", "oaep_max_plaintext_len", "RSA_OAEP_256",
    "rsa_sign", "rsa_verify", "RS256", "PS256", "SIGNING_ALGORITHMS",
    "aesgcm_encrypt", "aesgcm_decrypt", "new_content_key", "new_iv",
    "CONTENT_ENCRYPTION_KEY_SIZES",
]
