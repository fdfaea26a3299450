"""
Input validation rules for the account registry.
"""
import re


class SecurityConfig:
    """Validation configuration class"""

    # Username requirements
    MIN_USERNAME_LENGTH = 2
    MAX_USERNAME_LENGTH = 50
    USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_.@]+$')

    # Password requirements (kept low on purpose, this is a test fixture)
    MIN_PASSWORD_LENGTH = 4


def is_blank(value) -> bool:
    return not isinstance(value, str) or len(value.strip()) == 0


def validate_username(username: str) -> bool:
    """
    Validate username format.

    Args:
        username: The username to validate

    Returns:
        bool: True if the username is 2-50 characters of letters, digits, '_', '.' or '@'
    """
    if is_blank(username):
        return False

    if len(username) < SecurityConfig.MIN_USERNAME_LENGTH or len(username) > SecurityConfig.MAX_USERNAME_LENGTH:
        return False

    return SecurityConfig.USERNAME_PATTERN.fullmatch(username) is not None


def validate_password(password: str) -> bool:
    """
    Validate password against the minimum length requirement.

    Args:
        password: The password to validate

    Returns:
        bool: True if password is not blank and has at least MIN_PASSWORD_LENGTH characters
    """
    if is_blank(password):
        return False

    return len(password) >= SecurityConfig.MIN_PASSWORD_LENGTH
