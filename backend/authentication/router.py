from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from db.deps import get_db
from authentication.schemas import LoginRequest, LoginResponse, UserResponse
from authentication.security import verify_password, create_access_token
from authentication.deps import get_current_user
from authentication.repository import get_user_by_identifier

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = get_user_by_identifier(db, payload.email)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.role != payload.role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token({"sub": user.username, "role": user.role})
    return {
        "access_token": token,
        "token_type": "bearer",
        "role": user.role,
        "email": user.username,
    }


@router.get("/me", response_model=UserResponse)
def me(current_user: Any = Depends(get_current_user)):
    return {
        "email": current_user.username,
        "role": current_user.role,
        "is_active": current_user.is_active,
    }
