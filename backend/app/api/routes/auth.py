"""
Authentication routes for signup, login, current user and password recovery.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.user import (
    AuthResponse, CurrentUserResponse, MessageResponse, PasswordReset,
    SecurityQuestionResponse, UserCreate, UserLogin,
)
from app.models.user import User
from app.core.security import TokenService
from app.api.dependencies import get_current_user, get_token_service
from app.services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user and return a token."""
    user = user_service.register(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        recovery_question=user_data.recovery_question,
        recovery_answer=user_data.recovery_answer,
    )
    return {"user": user_service.to_public_user(user), "token": tokens.create_access_token(user.id)}


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Login and get JWT token."""
    user = user_service.authenticate(db, credentials.email, credentials.password)
    return {"user": user_service.to_public_user(user), "token": tokens.create_access_token(user.id)}


@router.get("/me", response_model=CurrentUserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return {"user": user_service.to_public_user(current_user)}


@router.get("/security-question/{email}", response_model=SecurityQuestionResponse)
def get_security_question(email: str, db: Session = Depends(get_db)):
    """Get the recovery question for an account."""
    return {"question": user_service.get_recovery_question(db, email)}


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: PasswordReset, db: Session = Depends(get_db)):
    """Reset a password using the recovery answer."""
    user_service.reset_password(db, payload.email, payload.recovery_answer, payload.new_password)
    return {"message": "Password reset successfully"}
