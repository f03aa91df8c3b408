"""Password hashing for locally stored accounts (stdlib pbkdf2_hmac)."""

import base64
import hashlib
import os

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def hash_password(password: str) -> str:
    """Salted PBKDF2 hash in ``pbkdf2_<alg>$<iterations>$<salt>$<key>`` form."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64url_encode(salt)}${_b64url_encode(dk)}"
