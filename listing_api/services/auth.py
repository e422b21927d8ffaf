"""
Authentication service for lister registration, login and token resolution.
"""

from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.config import settings
from listing_api.repositories.user import UserRepository
from listing_api.models.user import User
from listing_api.schemas.auth import RegisterRequest
from listing_api.utils.auth import create_access_token, verify_token, TokenExpired
from listing_api.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InactiveUserError,
    ValidationError,
)
from jose import JWTError
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing lister accounts and access tokens.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, user_data: RegisterRequest) -> User:
        """
        Register a new lister account.

        Raises:
            ConflictError: If the email is already registered
            ValidationError: If the email or password is rejected
        """
        try:
            user = await self.user_repo.create_user(user_data.model_dump())
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"Registered lister: {user.email}")
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid or the account is inactive
        """
        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        return user

    async def login(self, email: str, password: str) -> Tuple[User, str, int]:
        """
        Authenticate user and create an access token.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)
        """
        user = await self.authenticate_user(email, password)
        access_token = create_access_token(user_id=user.id, email=user.email)
        return user, access_token, settings.access_token_expire_minutes * 60

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Raises:
            InvalidTokenError: If token is invalid or its user no longer exists
            TokenExpiredError: If token is expired
            InactiveUserError: If user account is inactive
        """
        try:
            token_payload = verify_token(token)
            user_id = uuid.UUID(token_payload.user_id)
        except TokenExpired:
            raise TokenExpiredError()
        except (JWTError, ValueError) as e:
            raise InvalidTokenError(str(e))

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise InvalidTokenError("User no longer exists")

        if not user.is_active:
            raise InactiveUserError()

        return user
