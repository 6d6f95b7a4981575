from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from hotel_api.api.hotels.models import Hotel
from hotel_api.api.users.models import User, ROLE_ADMIN
from hotel_api.database.db import get_db
from hotel_api.utils.errors import BadRequest, Forbidden, Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


def generate_token(config, user_id: int, role: str) -> str:
    """
    Generate a signed JWT for a user.

    Args:
        config: Application config holding JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_DAYS.
        user_id (int): User's id
        role (str): User's role, copied into the token for convenience.

    Returns:
        str: Encoded access token
    """
    payload = {
        "user_id": user_id,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(days=config.JWT_EXPIRE_DAYS),
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(config, token: str) -> dict:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except JWTError:
        raise Unauthorized("Not authorized to access this route")


def get_current_user(
    request: Request,
    authorization: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the acting user from the bearer token.
    Return:
        the User row the token's ``user_id`` points at.
    """
    if authorization is None or not authorization.credentials:
        raise Unauthorized("Not authorized to access this route")

    payload = decode_token(request.app.state.config, authorization.credentials)
    user = db.query(User).filter(User.id == payload.get("user_id")).first()
    if not user:
        raise Unauthorized("Not authorized to access this route")
    return user


def authorize(*roles: str):
    """Dependency factory restricting a route to the given roles."""
    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise Forbidden(f"User role {user.role} is not authorized to access this route")
        return user
    return dependency


def is_owner_or_admin(owner_id: int, user: User) -> bool:
    return owner_id == user.id or user.role == ROLE_ADMIN


def ensure_owner(owner_id: int, user: User, message: str):
    """Raise ``Unauthorized`` unless the user owns the resource or is an admin."""
    if not is_owner_or_admin(owner_id, user):
        raise Unauthorized(message)


def ensure_can_publish_hotel(db: Session, user: User):
    """Non-admin users may own at most one hotel."""
    if user.role == ROLE_ADMIN:
        return
    published = db.query(Hotel).filter(Hotel.user_id == user.id).first()
    if published:
        raise BadRequest(f"The user with ID:{user.id} has already published a hotel")
