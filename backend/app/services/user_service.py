"""
Identity store: durable user records and credential checks.
"""
from typing import Optional
import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.exceptions import (
    EmailTaken, InvalidCredentials, RecoveryNotConfigured, UserNotFound, WrongRecoveryAnswer,
)
from app.core.security import (
    get_password_hash, get_recovery_answer_hash, verify_password, verify_recovery_answer,
)
from app.core.utils import serialize_date
from app.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(
        select(User).where(User.email == normalize_email(email))
    ).scalar_one_or_none()


def find_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def create_user(
    db: Session,
    name: str,
    email: str,
    password_hash: str,
    recovery_question: str,
    recovery_answer_hash: str,
) -> User:
    """
    Insert a new user. Email uniqueness is case-insensitive; the lowercased
    address is stored and checked, and the unique index catches races.
    """
    normalized = normalize_email(email)
    if find_by_email(db, normalized):
        raise EmailTaken()

    user = User(
        name=name,
        email=normalized,
        password_hash=password_hash,
        recovery_question=recovery_question,
        recovery_answer_hash=recovery_answer_hash,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailTaken()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


def update_password_hash(db: Session, user_id: int, password_hash: str) -> User:
    user = find_by_id(db, user_id)
    if not user:
        raise UserNotFound()
    user.password_hash = password_hash
    db.commit()
    db.refresh(user)
    return user


def register(
    db: Session,
    name: str,
    email: str,
    password: str,
    recovery_question: str,
    recovery_answer: str,
) -> User:
    """Hash the secrets and create the account."""
    return create_user(
        db,
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        recovery_question=recovery_question,
        recovery_answer_hash=get_recovery_answer_hash(recovery_answer),
    )


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; unknown email and wrong password look the same."""
    user = find_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


def get_recovery_question(db: Session, email: str) -> str:
    user = find_by_email(db, email)
    if not user:
        raise UserNotFound()
    if not user.recovery_question:
        raise RecoveryNotConfigured()
    return user.recovery_question


def reset_password(db: Session, email: str, recovery_answer: str, new_password: str) -> User:
    """Replace the password after checking the recovery answer."""
    user = find_by_email(db, email)
    if not user:
        raise UserNotFound()
    if not user.recovery_answer_hash:
        raise RecoveryNotConfigured("Security answer not set")
    if not verify_recovery_answer(recovery_answer, user.recovery_answer_hash):
        logger.info(f"Rejected password reset for user {user.id}: wrong recovery answer")
        raise WrongRecoveryAnswer()

    user = update_password_hash(db, user.id, get_password_hash(new_password))
    logger.info(f"Password reset for user {user.id}")
    return user


def to_public_user(user: User) -> dict:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "created_at": serialize_date(user.created_at),
    }
