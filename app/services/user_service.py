"""
User service.

Registration and token issuance for schedule owners.
"""

from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlmodel import Session

from app.core.config import settings
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.user import Token, UserCreate, UserLogin


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        self.repository = UserRepository(session)

    def register(self, user_data: UserCreate) -> User:
        """
        Register a new user.

        Raises:
            HTTPException: If email already exists
        """
        if self.repository.exists_by_email(user_data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already registered")

        user = User(email=user_data.email, hashed_password=get_password_hash(user_data.password),
                    full_name=user_data.full_name, )
        user = self.repository.create(user)
        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, login_data: UserLogin) -> Token:
        """
        Authenticate user and return access token.

        Raises:
            HTTPException: If credentials are invalid or the account is inactive
        """
        user = self.repository.get_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.hashed_password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password",
                                headers={ "WWW-Authenticate": "Bearer" }, )

        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(data={ "sub": user.email }, expires_delta=access_token_expires)

        return Token(access_token=access_token, token_type="bearer")

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.repository.get_by_email(email)
