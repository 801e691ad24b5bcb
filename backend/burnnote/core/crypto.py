from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
import base64
import binascii
import os

from burnnote.config import KDF_ITERATIONS

FORMAT_VERSION = b"\x01"
SALT_SIZE = 16
NONCE_SIZE = 12
TAG_SIZE = 16
KEY_SIZE = 32

_HEADER_SIZE = len(FORMAT_VERSION) + SALT_SIZE + NONCE_SIZE

# ---------- KEY DERIVATION ----------

def derive_note_key(password: str, salt: bytes, iterations: int = KDF_ITERATIONS) -> bytes:
    """
    PBKDF2-HMAC-SHA256 → 32-byte AES-256 key
    """
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    ).derive(password.encode("utf-8"))


# ---------- TOKEN FORMAT ----------

def _unpack(token) -> tuple[bytes, bytes, bytes] | None:
    """Split a token into (salt, nonce, ciphertext+tag), or None if malformed."""
    if not isinstance(token, str):
        return None
    try:
        raw = base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True)
    except (UnicodeEncodeError, binascii.Error, ValueError):
        return None

    if len(raw) < _HEADER_SIZE + TAG_SIZE or raw[:1] != FORMAT_VERSION:
        return None

    salt = raw[1:1 + SALT_SIZE]
    nonce = raw[1 + SALT_SIZE:_HEADER_SIZE]
    return salt, nonce, raw[_HEADER_SIZE:]


# ---------- CIPHER ----------

class NoteCipher:
    """Password-keyed AES-GCM for note bodies.

    Token layout (URL-safe base64):
        version (1) + salt (16) + nonce (12) + ciphertext + tag (16)
    """

    def __init__(self, iterations: int = KDF_ITERATIONS):
        self.iterations = iterations

    def encrypt(self, plaintext: str, password: str) -> str:
        salt = os.urandom(SALT_SIZE)
        nonce = os.urandom(NONCE_SIZE)
        key = derive_note_key(password, salt, self.iterations)
        ciphertext = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), FORMAT_VERSION)
        return base64.urlsafe_b64encode(FORMAT_VERSION + salt + nonce + ciphertext).decode("ascii")

    def decrypt(self, token: str, password: str) -> str | None:
        """
        Returns None for a wrong password or a corrupt token.
        Both cases pay for one key derivation.
        """
        parts = _unpack(token)
        salt, nonce, ciphertext = parts or (bytes(SALT_SIZE), b"", b"")
        try:
            key = derive_note_key(password, salt, self.iterations)
        except UnicodeEncodeError:
            # e.g. lone surrogates from JSON; still one derivation
            derive_note_key("", salt, self.iterations)
            return None
        if parts is None:
            return None

        try:
            plaintext = AESGCM(key).decrypt(nonce, ciphertext, FORMAT_VERSION)
            return plaintext.decode("utf-8")
        except (InvalidTag, UnicodeDecodeError):
            return None


_default_cipher = NoteCipher()


def encrypt_note(plaintext: str, password: str) -> str:
    return _default_cipher.encrypt(plaintext, password)


def decrypt_note(token: str, password: str) -> str | None:
    return _default_cipher.decrypt(token, password)
