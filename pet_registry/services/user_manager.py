"""User manager for fastapi-users authentication system."""
import logging
import uuid
from typing import Optional

from fastapi import Request
from fastapi_users import BaseUserManager, UUIDIDMixin

from pet_registry.models.user import User
from pet_registry.config import Settings


logger = logging.getLogger(__name__)


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    """
    Custom user manager for handling user lifecycle events.

    Extends fastapi-users BaseUserManager; the users it manages are the
    accounts that own pets.
    """

    def __init__(self, user_db, settings: Settings):
        """
        Initialize UserManager with user database and settings.

        Args:
            user_db: Database adapter for user operations
            settings: Application settings containing secrets
        """
        super().__init__(user_db)
        self.reset_password_token_secret = settings.secret_key
        self.verification_token_secret = settings.secret_key
        self.reset_password_token_lifetime_seconds = settings.jwt_lifetime_seconds
        self.verification_token_lifetime_seconds = settings.jwt_lifetime_seconds

    async def on_after_register(
        self,
        user: User,
        request: Optional[Request] = None
    ) -> None:
        """Hook called after successful user registration."""
        logger.info(f"User {user.id} has registered with email {user.email}")

    async def on_after_login(
        self,
        user: User,
        request: Optional[Request] = None,
        response=None,
    ) -> None:
        """Hook called after a successful login."""
        logger.info(f"User {user.id} logged in")
