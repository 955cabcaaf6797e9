# inventory_engine/core/auth.py

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventory_engine.database import get_db
from inventory_engine.models.users import User
from inventory_engine.core.jwt import decode_access_token
from inventory_engine.core.oauth2 import oauth2_scheme


SALES_ROLES = ("Owner", "Admin", "Staff")
MANAGER_ROLES = ("Owner", "Admin")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
):
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    user = db.query(User).filter(User.id == int(user_id)).first()

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user

def require_roles(*roles: str):
    # Dependency factory: only the listed roles get through
    def checker(current_user: User = Depends(get_current_user)):
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are unauthorized",
            )
        return current_user

    return checker
