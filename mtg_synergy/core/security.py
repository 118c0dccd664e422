"""
Identity token handling for the relational collection store.

Bearer tokens are JWTs signed with the store key; the `sub` claim names the
owner whose collection rows the request may touch.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from .config import settings


@dataclass(frozen=True)
class Identity:
    """Request-scoped caller identity: the raw bearer token, if any."""
    token: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return not self.token


ANONYMOUS = Identity()


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Create a JWT identity token.

    Args:
        subject: Owner id to place in the `sub` claim.
        expires_delta: Optional custom expiration time (default one hour).
        secret_key: Signing key. Uses settings if not provided.
        algorithm: Signing algorithm. Uses settings if not provided.

    Returns:
        str: Encoded JWT token.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode = {"sub": str(subject), "exp": expire}

    return jwt.encode(
        to_encode,
        secret_key or settings.collection_store_key,
        algorithm=algorithm or settings.collection_jwt_algorithm,
    )


def decode_identity_token(
    token: str,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> Optional[str]:
    """
    Decode and validate an identity token.

    Args:
        token: JWT token string to decode.
        secret_key: Verification key. Uses settings if not provided.
        algorithm: Expected algorithm. Uses settings if not provided.

    Returns:
        str: Owner id from the `sub` claim, or None if the token is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key or settings.collection_store_key,
            algorithms=[algorithm or settings.collection_jwt_algorithm],
            options={"verify_aud": False},
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None or subject == "":
        return None

    return str(subject)
