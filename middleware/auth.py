import uuid

from fastapi import Request, HTTPException, status
from utils.jwt import verify_jwt


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_jwt_middleware(request: Request) -> uuid.UUID:
    """
    Middleware to verify JWT token in Authorization header

    Args:
        request: FastAPI request object

    Returns:
        Authenticated user ID taken from the token subject

    Raises:
        HTTPException: If token is missing, invalid, or expired
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise _unauthorized("Missing Authorization header")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid Authorization header format. Expected: Bearer <token>")

    token = parts[1]
    payload = verify_jwt(token)

    if not payload:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = uuid.UUID(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid or expired token") from None

    return user_id
