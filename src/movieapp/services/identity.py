"""Maps external identities to local users."""

import logging

from sqlalchemy.exc import IntegrityError

from movieapp.errors import IdentityConflictError, NotFoundError, ValidationError
from movieapp.models.user import User
from movieapp.repositories.user_repository import UserRepository
from movieapp.schemas.user import ProfileUpdate

logger = logging.getLogger(__name__)


class IdentityResolver:
    """
    Finds or lazily creates the local user for an external identity.

    Two first requests from the same identity can race to create the user;
    the unique external_id constraint rejects one, and the loser re-reads the
    winner's row instead of failing.
    """

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def find_or_create_user(self, external_id: str, email: str) -> User:
        """
        Get the user for an identity, creating it on first sight.

        The stored email is never overwritten here; only update_profile
        changes stored fields.

        Raises:
            IdentityConflictError: the create was rejected as a duplicate but
                no user with this external_id can be found afterwards
        """
        user = await self.users.get_by_external_id(external_id)
        if user is not None:
            return user

        try:
            user = await self.users.create(external_id=external_id, email=email)
        except IntegrityError as e:
            # Lost the race; a single re-read, never a loop
            user = await self.users.get_by_external_id(external_id)
            if user is None:
                logger.error(
                    f"User create for {external_id!r} ({email}) was rejected as a duplicate "
                    f"but no user with that external id exists",
                    exc_info=True,
                )
                raise IdentityConflictError(
                    "Could not resolve user after a conflicting create"
                ) from e
            return user

        logger.info(f"Created user {user.id} for external identity {external_id!r}")
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def update_profile(self, user_id: str, data: ProfileUpdate) -> User:
        """
        Apply a partial profile update.

        Raises:
            NotFoundError: user_id does not exist
            ValidationError: the username is taken by another user
        """
        user = await self.get_user(user_id)

        fields = data.model_dump(include=data.model_fields_set)
        if not fields:
            return user

        username = fields.get("username")
        if username is not None:
            holder = await self.users.get_by_username(username)
            if holder is not None and holder.id != user.id:
                raise ValidationError(f"Username {username!r} is already taken")

        try:
            return await self.users.update(user, fields)
        except IntegrityError as e:
            # Only a racing username claim maps to a user-facing error
            if username is None:
                raise
            raise ValidationError(f"Username {username!r} is already taken") from e
