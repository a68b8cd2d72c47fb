"""
Database Name and Credential Generation

Pure helpers used by the provisioning services:

    - generate_unique_database_name: deterministic ``s{server_id}_{label}`` names
    - generate_username: ``u{server_id}_`` followed by 10 random alphanumerics
    - generate_password: 24 random characters from a wide printable alphabet

Randomness comes from the ``secrets`` module. Username and password are drawn
independently; neither is derived from the other.
"""

import re
import secrets
import string

from common.models import DATABASE_NAME_MAX_LENGTH

USERNAME_RANDOM_LENGTH = 10
PASSWORD_LENGTH = 24

USERNAME_ALPHABET = string.ascii_letters + string.digits
# Quotes, backslashes and whitespace are left out so the password survives
# copy/paste into connection strings and shell commands.
PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*()-_=+[]{}<>,.?:;~"

_INVALID_LABEL_CHARACTERS = re.compile(r"[^a-z0-9]+")


def normalize_database_label(label: str) -> str:
    """
    Lower-case a label and collapse every run of invalid characters to one "_".

    Leading and trailing separators are stripped.

    Example:
        ```python
        normalize_database_label("My Shop-DB!")  # "my_shop_db"
        ```
    """
    return _INVALID_LABEL_CHARACTERS.sub("_", label.lower()).strip("_")


def generate_unique_database_name(label: str, server_id: int) -> str:
    """
    Build the physical database name for a server from a human supplied label.

    The ``s{server_id}_`` prefix is always kept intact; only the label is
    truncated so the whole name fits within DATABASE_NAME_MAX_LENGTH.

    Args:
        label: Free-form label chosen by the user.
        server_id: Owning server id.

    Returns:
        The database name, e.g. ``generate_unique_database_name("example", 1)``
        returns ``"s1_example"``.
    """
    prefix = f"s{server_id}_"
    available = max(DATABASE_NAME_MAX_LENGTH - len(prefix), 0)
    # Truncation can end on a separator.
    return prefix + normalize_database_label(label)[:available].rstrip("_")


def generate_username(server_id: int) -> str:
    """Return ``u{server_id}_`` followed by 10 random alphanumeric characters."""
    suffix = "".join(
        secrets.choice(USERNAME_ALPHABET) for _ in range(USERNAME_RANDOM_LENGTH)
    )
    return f"u{server_id}_{suffix}"


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Return a random password drawn from PASSWORD_ALPHABET."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


class CredentialGenerator:
    """
    Injectable wrapper around the module level generators.

    Services receive an instance so tests can substitute predictable credentials.
    """

    def generate_username(self, server_id: int) -> str:
        return generate_username(server_id)

    def generate_password(self) -> str:
        return generate_password()
