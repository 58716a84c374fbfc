from datetime import datetime, timedelta, timezone

from jose import jwt, ExpiredSignatureError, JWTError

from app.core.config import Settings
from app.core.exceptions import AuthError


# -------- CREATE TOKEN --------
def create_access_token(data: dict, settings: Settings, expires_minutes: int | None = None) -> str:
    """Generate a signed JWT carrying ``data`` plus iat/exp."""
    to_encode = data.copy()
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    )
    to_encode.update({"iat": issued_at, "exp": expire})
    return jwt.encode(to_encode, settings.signing_key, algorithm=settings.jwt_algorithm)


# -------- DECODE TOKEN --------
def decode_access_token(token: str, settings: Settings) -> dict:
    """Decode and verify signature + expiry. Raises AuthError on any failure."""
    if not token:
        raise AuthError("Not authorized, no token")

    try:
        payload = jwt.decode(token, settings.signing_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthError("Token expired")
    except JWTError:
        raise AuthError("Invalid or expired token")

    if "sub" not in payload or "role" not in payload or "exp" not in payload:
        raise AuthError("Invalid token payload")

    return payload
