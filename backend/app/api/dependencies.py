"""
Shared route dependencies: token service and bearer authentication.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from app.core.exceptions import MalformedCredential, MissingCredential, UnknownSubject
from app.core.security import TokenService
from app.db.session import get_db
from app.models.user import User
from app.services import user_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """Token service built from the settings passed to create_app."""
    return request.app.state.token_service


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a live user record."""
    if not request.headers.get("Authorization"):
        raise MissingCredential()
    if credentials is None:
        raise MalformedCredential("Invalid authorization header")

    user_id = tokens.decode_subject(credentials.credentials)
    user = user_service.find_by_id(db, user_id)
    if not user:
        raise UnknownSubject()
    return user
