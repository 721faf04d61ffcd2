'''
    RSA-OAEP-256 key wrapping

    Used to wrap the per-token content-encryption key for the recipient.
'''

# ========== Imports ==========
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

RSA_OAEP_256 = "RSA-OAEP-256"

_OAEP_SHA256 = padding.OAEP(
    mgf=padding.MGF1(hashes.SHA256()),
    algorithm=hashes.SHA256(),
    label=None,
)


# ========== RSA OAEP Encryption ==========

def oaep_encrypt(public_key: RSAPublicKey, plaintext: bytes) -> bytes:
    if len(plaintext) > oaep_max_plaintext_len(public_key):
        raise ValueError("plaintext too long for RSA-OAEP-256 with this key")
    return public_key.encrypt(plaintext, _OAEP_SHA256)


def oaep_decrypt(private_key: RSAPrivateKey, ciphertext: bytes) -> bytes:
    return private_key.decrypt(ciphertext, _OAEP_SHA256)


# ========== Helper Function ==========

def oaep_max_plaintext_len(public_key: RSAPublicKey) -> int:
    k = (public_key.key_size + 7) // 8        # modulus bytes
    hlen = 32                                  # SHA-256
    return k - 2*hlen - 2                      # 2048-bit -> 256-64-2 = 190
