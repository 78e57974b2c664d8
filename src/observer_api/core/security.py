"""Credential primitives: password generation, hashing and phone normalisation.

Uses passlib with bcrypt for password hashing.  Phone numbers are the login
key for every account, so they are stored in a canonical 10-digit form.
"""

import re
import secrets
from typing import TYPE_CHECKING

from passlib.context import CryptContext

if TYPE_CHECKING:
    from observer_api.models.user import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_LENGTH = 8
PHONE_PATTERN = re.compile(r"^\d{10}$")

_NON_DIGITS = re.compile(r"\D")
_COUNTRY_PREFIXES = ("7", "8")


class InvalidPhoneNumber(ValueError):
    """Raised when a phone number cannot be reduced to the canonical 10-digit form."""

    def __init__(self, phone: str | None) -> None:
        self.phone = phone
        super().__init__(f"Invalid phone number: {phone!r}")


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt.

    Args:
        password: The plaintext password to hash.

    Returns:
        The bcrypt-hashed password string.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash.

    Args:
        plain_password: The plaintext password to verify.
        hashed_password: The bcrypt hash to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)


def generate_password() -> str:
    """Return a random numeric password, zero-padded to ``PASSWORD_LENGTH`` digits."""
    return f"{secrets.randbelow(10**PASSWORD_LENGTH):0{PASSWORD_LENGTH}d}"


def normalize_phone_number(phone: str | None) -> str:
    """Reduce a user-entered phone number to its 10-digit national form.

    Formatting characters are dropped.  An 11-digit number starting with a
    ``7`` or ``8`` country/trunk prefix loses the prefix.

    Args:
        phone: Raw phone number, e.g. ``"+7 (916) 123-45-67"``.

    Returns:
        The normalised number, e.g. ``"9161234567"``.

    Raises:
        InvalidPhoneNumber: If the result is not exactly 10 digits.
    """
    if phone is None:
        raise InvalidPhoneNumber(phone)
    digits = _NON_DIGITS.sub("", str(phone))
    if len(digits) == 11 and digits.startswith(_COUNTRY_PREFIXES):
        digits = digits[1:]
    if not PHONE_PATTERN.match(digits):
        raise InvalidPhoneNumber(phone)
    return digits


def issue_password(user: "User") -> str:
    """Generate a fresh password for ``user`` and store its hash.

    The plaintext is kept on the transient ``user.password`` attribute so it
    can be delivered after commit.

    Returns:
        The generated plaintext password.
    """
    password = generate_password()
    user.password = password
    user.hashed_password = hash_password(password)
    return password
