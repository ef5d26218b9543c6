import hashlib
import hmac

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..core import Transform, register_transform

CRYPT_MODES = (("encrypt", "Encrypt"), ("decrypt", "Decrypt"))
HASH_ALGORITHMS = (("md5", "MD5"), ("sha256", "SHA256"))

def _fit(value: str, size: int) -> bytes:
    """UTF-8 bytes of `value`, truncated or zero-padded to `size`."""
    return value.encode("utf-8")[:size].ljust(size, b"\0")

def _from_hex(text: str):
    try:
        return bytes.fromhex(text.strip())
    except ValueError:
        return None

# ==========================================
#  SYMMETRIC CIPHERS
# ==========================================

@register_transform
class BlockCipher(Transform):
    """
    AES-128 in CBC mode with PKCS7 padding; ciphertext is hex.

    Key and IV are taken as UTF-8 and fitted to 16 bytes. Decryption
    strips padding leniently so a wrong key yields garbage, not an error.
    """
    name = "block_cipher"
    display_name = "Block Cipher (AES-128-CBC)"
    description = "AES-128-CBC with PKCS7 padding, hex ciphertext."
    category = "Modern Cryptography"

    def __init__(self):
        self.mode = "encrypt"
        self.key = "0123456789abcdef"
        self.iv = "fedcba9876543210"

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, CRYPT_MODES)
        self.key = editor.text("key", "Key (16 bytes)", self.key)
        self.iv = editor.text("iv", "IV (16 bytes)", self.iv)

    def _cipher(self):
        return Cipher(algorithms.AES(_fit(self.key, 16)), modes.CBC(_fit(self.iv, 16)))

    def apply(self, text: str) -> str:
        if self.mode == "encrypt":
            padder = padding.PKCS7(128).padder()
            data = padder.update(text.encode("utf-8")) + padder.finalize()
            encryptor = self._cipher().encryptor()
            return (encryptor.update(data) + encryptor.finalize()).hex()

        ciphertext = _from_hex(text)
        if ciphertext is None:
            return "Invalid hex input"
        if len(ciphertext) % 16:
            return "Decryption error"

        decryptor = self._cipher().decryptor()
        plaintext = decryptor.update(ciphertext) + decryptor.finalize()
        if plaintext and 0 < plaintext[-1] <= 16:
            plaintext = plaintext[:-plaintext[-1]]
        return plaintext.decode("utf-8", errors="replace")


def rc4_keystream(key: bytes, length: int) -> bytes:
    s = list(range(256))
    j = 0
    for i in range(256):
        j = (j + s[i] + key[i % len(key)]) % 256
        s[i], s[j] = s[j], s[i]

    stream = bytearray()
    i = j = 0
    for _ in range(length):
        i = (i + 1) % 256
        j = (j + s[i]) % 256
        s[i], s[j] = s[j], s[i]
        stream.append(s[(s[i] + s[j]) % 256])
    return bytes(stream)


@register_transform
class RC4Cipher(Transform):
    name = "rc4"
    display_name = "RC4"
    description = "RC4 stream cipher, hex ciphertext."
    category = "Modern Cryptography"

    def __init__(self):
        self.mode = "encrypt"
        self.key = "secret"

    def configure(self, editor):
        self.mode = editor.choice("mode", "Mode", self.mode, CRYPT_MODES)
        self.key = editor.text("key", "Key", self.key)

    def apply(self, text: str) -> str:
        key = self.key.encode("utf-8")
        if not key:
            return "Error: RC4 key cannot be empty"

        if self.mode == "encrypt":
            data = text.encode("utf-8")
        else:
            data = _from_hex(text)
            if data is None:
                return "Invalid hex input"

        stream = rc4_keystream(key, len(data))
        result = bytes(a ^ b for a, b in zip(data, stream))
        if self.mode == "encrypt":
            return result.hex()
        return result.decode("utf-8", errors="replace")

# ==========================================
#  DIGESTS
# ==========================================

@register_transform
class HashFunction(Transform):
    name = "hash"
    display_name = "Hash Function"
    description = "MD5 or SHA-256 digest as hex."
    category = "Modern Cryptography"

    def __init__(self):
        self.algorithm = "sha256"

    def configure(self, editor):
        self.algorithm = editor.choice("algorithm", "Algorithm", self.algorithm, HASH_ALGORITHMS)

    def apply(self, text: str) -> str:
        digest = hashlib.md5 if self.algorithm == "md5" else hashlib.sha256
        return digest(text.encode("utf-8")).hexdigest()


@register_transform
class HMACFunction(Transform):
    name = "hmac"
    display_name = "HMAC"
    description = "Keyed MD5 or SHA-256 message authentication code."
    category = "Modern Cryptography"

    def __init__(self):
        self.key = "secret"
        self.algorithm = "sha256"

    def configure(self, editor):
        self.key = editor.text("key", "Key", self.key)
        self.algorithm = editor.choice("algorithm", "Algorithm", self.algorithm, HASH_ALGORITHMS)

    def apply(self, text: str) -> str:
        digest = hashlib.md5 if self.algorithm == "md5" else hashlib.sha256
        return hmac.new(self.key.encode("utf-8"), text.encode("utf-8"), digest).hexdigest()
