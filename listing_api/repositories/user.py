"""
User repository for authentication and account operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.repositories.base import BaseRepository
from listing_api.models.user import User
from listing_api.utils.exceptions import ConflictError
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for lister accounts.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and password hashing.

        Args:
            user_data: Must include email, password, full_name

        Returns:
            Created user instance

        Raises:
            ValueError: If email or password is invalid
            ConflictError: If the email is already registered
        """
        data = dict(user_data)
        email = User.validate_email_format(data["email"])

        if await self.get_by_email(email):
            raise ConflictError(f"User with email {email} already exists")

        create_data = {
            "email": email,
            "full_name": data["full_name"],
            "hashed_password": User.hash_password(data["password"]),
            "is_active": data.get("is_active", True),
        }

        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        return await self.get_by_field("email", email.lower().strip())

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)

        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not user.is_active:
            logger.debug(f"Authentication failed: user {email} is inactive")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.info(f"User authenticated successfully: {email}")
        return user
