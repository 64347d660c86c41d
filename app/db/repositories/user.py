"""
User repository.

Lookups needed to register users and resolve bearer tokens to owners.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, user: User) -> User:
        """
        Insert a new user.

        Returns:
            Created user with generated id
        """
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None
