"""
Password hashing and validation.

bcrypt with a SHA-256 pre-hash, so passwords longer than bcrypt's
72-byte limit are not silently truncated.

Example:
    from common.utils import hash_password, verify_password, validate_password

    is_valid, errors = validate_password("secret1", min_length=6)
    hashed = hash_password("secret1")
    assert verify_password("secret1", hashed)
"""

import base64
import hashlib
import re
from typing import List, Tuple

import bcrypt as bcrypt_lib


def _prehash_password(password: str) -> bytes:
    sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(sha256_hash)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt with SHA-256 pre-hashing."""
    salt = bcrypt_lib.gensalt()
    return bcrypt_lib.hashpw(_prehash_password(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its hash.

    Returns False for empty or malformed hashes instead of raising.
    """
    if not password or not hashed:
        return False

    try:
        return bcrypt_lib.checkpw(_prehash_password(password), hashed.encode("utf-8"))
    except ValueError:
        return False


def validate_password(
    password: str,
    min_length: int = 6,
    max_length: int = 128,
    require_letter: bool = False,
    require_digit: bool = False,
) -> Tuple[bool, List[str]]:
    """
    Validate password strength.

    Args:
        password: The password to validate
        min_length: Minimum password length
        max_length: Maximum password length
        require_letter: Require at least one letter
        require_digit: Require at least one digit

    Returns:
        Tuple of (is_valid: bool, errors: List[str])

    Examples:
        >>> validate_password("abc")
        (False, ['Password must be at least 6 characters'])
        >>> validate_password("secret1")
        (True, [])
    """
    errors: List[str] = []
    password = password or ""

    if len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters")

    if len(password) > max_length:
        errors.append(f"Password must be no more than {max_length} characters")

    if require_letter and not re.search(r"[A-Za-z]", password):
        errors.append("Password must contain at least one letter")

    if require_digit and not re.search(r"\d", password):
        errors.append("Password must contain at least one digit")

    return len(errors) == 0, errors
