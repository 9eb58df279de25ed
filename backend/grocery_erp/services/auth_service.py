# Overview: Service-layer operations for user credentials; bcrypt hashing and credential checks.

"""
User credential service.

Passwords are hashed with bcrypt. Roles are stored for display only; no
route in this backend enforces them.
"""

import re

import bcrypt

from ..models import User
from ..validation import ConflictError
from .entity_store import EntityStore


DEFAULT_BCRYPT_ROUNDS = 12


class PasswordValidationError(Exception):
    """Raised when password doesn't meet strength requirements."""
    pass


class AuthError(Exception):
    """Raised when credentials are rejected."""
    pass


def validate_password_strength(password: str) -> None:
    """
    Minimum 8 characters with at least one uppercase letter, one lowercase
    letter and one digit.
    """
    if len(password) < 8:
        raise PasswordValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', password):
        raise PasswordValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', password):
        raise PasswordValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', password):
        raise PasswordValidationError("Password must contain at least one digit")


def hash_password(password: str, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed hash
        return False


def create_user(
    entities: EntityStore,
    *,
    username: str,
    email: str,
    password: str,
    role: str | None = None,
    employee_id: int | None = None,
    is_active: bool = True,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Raises:
        ConflictError: username or email already taken
        PasswordValidationError: password too weak
    """
    if entities.users.find_first(username=username) is not None:
        raise ConflictError("Username already exists")
    if entities.users.find_first(email=email) is not None:
        raise ConflictError("Email already exists")

    return entities.users.create({
        "username": username,
        "email": email,
        "password_hash": hash_password(password, rounds=rounds),
        "role": role or "employee",
        "employee_id": employee_id,
        "is_active": is_active,
    })


def get_user_by_username(entities: EntityStore, username: str) -> User | None:
    return entities.users.find_first(username=username)


def authenticate(entities: EntityStore, username: str, password: str) -> User | None:
    """Active user matching the credentials, or None."""
    user = get_user_by_username(entities, username)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login(entities: EntityStore, username: str, password: str) -> User:
    """
    Credential check only; no session or token is issued.

    Raises:
        AuthError: unknown user, inactive user or wrong password
    """
    user = authenticate(entities, username, password)
    if user is None:
        raise AuthError("Invalid username or password")
    return user
