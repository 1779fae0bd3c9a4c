"""FastAPI dependencies: caller identity from the bearer token."""

from fastapi import HTTPException, Request
from jose import JWTError

from hydration_tracker.core.auth import decode_token


async def get_owner_id(request: Request) -> str:
    """Return the token subject. Every intake operation is scoped to it."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})
    token = auth_header[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})
    try:
        payload = decode_token(token)
    except JWTError:
        raise HTTPException(
            status_code=401, detail="Invalid or expired token", headers={"WWW-Authenticate": "Bearer"}
        )
    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise HTTPException(status_code=401, detail="Invalid token", headers={"WWW-Authenticate": "Bearer"})
    return subject
