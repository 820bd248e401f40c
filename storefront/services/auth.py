from typing import Optional
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from storefront.config import get_settings
from storefront.database import get_db
from storefront.errors import ForbiddenError
from storefront.models.user import User
from storefront.schemas.user import TokenData

settings = get_settings()
security = HTTPBearer(auto_error=False)


class AuthService:
    """
    Sessions are issued by the external login provider; this service only
    reads the signed token it leaves behind.
    """

    @staticmethod
    def decode_token(token: str) -> Optional[TokenData]:
        try:
            payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
            open_id: str = payload.get("sub")
            if open_id is None:
                return None
            return TokenData(open_id=open_id)
        except JWTError:
            return None

    @staticmethod
    def get_user_by_open_id(db: Session, open_id: str) -> Optional[User]:
        return db.query(User).filter(User.open_id == open_id).first()


def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    if credentials:
        return credentials.credentials
    return None


def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db)
) -> Optional[User]:
    if not token:
        return None

    token_data = AuthService.decode_token(token)
    if token_data is None or token_data.open_id is None:
        return None

    return AuthService.get_user_by_open_id(db, token_data.open_id)


def get_current_user_required(
    user: Optional[User] = Depends(get_current_user)
) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please login (10001)"
        )
    return user


def get_current_admin(
    current_user: User = Depends(get_current_user_required)
) -> User:
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user
