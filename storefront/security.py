"""
Password hashing and bearer-token helpers.

Tokens are HS256 JWTs. The payload carries `sub` (user id), `username` (email),
`role`, `firstName`, `lastName`, `isAdmin` and `exp`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from storefront.errors import UnauthorizedError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, decoded from a bearer token."""

    user_id: int
    username: str
    role: str
    is_admin: bool = False
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "username": self.username,
            "role": self.role,
            "isAdmin": self.is_admin,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }


def issue_token(user, secret: str, expires_in: int) -> str:
    """Sign an access token for a `User` row."""
    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    payload = {
        "sub": str(user.id),
        "username": user.email,
        "role": role,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "isAdmin": bool(user.is_admin),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> Identity:
    """Validate signature and expiry; raise `UnauthorizedError` otherwise."""
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise UnauthorizedError("Invalid token")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid token")

    return Identity(
        user_id=user_id,
        username=payload.get("username", ""),
        role=payload.get("role", ""),
        is_admin=bool(payload.get("isAdmin", False)),
        first_name=payload.get("firstName"),
        last_name=payload.get("lastName"),
    )
