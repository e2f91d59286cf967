"""Pet service: owner-scoped reads, create/update and soft delete of pets."""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from pet_registry.models.pet import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NFT_ID_MAX_LENGTH,
    OWNER_ID_MAX_LENGTH,
    OWNER_NAME_MAX_LENGTH,
    Pet,
)
from pet_registry.schemas.pet import FieldError, PetUpdate


logger = logging.getLogger(__name__)


# (attribute, JSON path, max length)
FIELD_LIMITS = (
    ("name", "name", NAME_MAX_LENGTH),
    ("description", "description", DESCRIPTION_MAX_LENGTH),
    ("nft_id", "nftId", NFT_ID_MAX_LENGTH),
    ("owner_name", "ownerName", OWNER_NAME_MAX_LENGTH),
    ("owner_id", "ownerId", OWNER_ID_MAX_LENGTH),
)

UPDATABLE_FIELDS = (
    "name",
    "description",
    "birth_date",
    "nft_id",
    "owner_name",
    "owner_id",
)

TRIMMED_FIELDS = ("name", "description")


class PetNotFoundError(Exception):
    """The requested pet does not exist, is not visible to the caller, or was deleted."""

    def __init__(self, reference: object):
        self.reference = reference
        super().__init__(f"Pet not found: {reference}")


class PetValidationError(Exception):
    """One or more fields of a pet body are invalid."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__(
            "; ".join(f"{error.path}: {error.message}" for error in errors)
        )


class PetService:
    """
    Service for reading and writing pet records.

    Every read goes through Pet.active(), so soft-deleted pets are never
    returned. All lookups except find_by_nft_id are scoped to the caller.
    Storage errors are not caught here and reach the caller unchanged.
    """

    def __init__(self, strict_ownership: bool = True):
        """
        Args:
            strict_ownership: When True, update() only targets the caller's
                active pets. When False it loads the target by id alone,
                whatever its owner or status.
        """
        self.strict_ownership = strict_ownership

    async def find_by_current_user(
        self,
        db: AsyncSession,
        user_id: uuid.UUID
    ) -> List[Pet]:
        """List all active pets owned by the user, in storage order."""
        result = await db.execute(Pet.active().where(Pet.user_id == user_id))
        return list(result.scalars().all())

    async def find_by_id(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        pet_id: uuid.UUID
    ) -> Pet:
        """
        Get one of the user's active pets.

        Raises:
            PetNotFoundError: wrong id, another owner's pet, or a deleted
                pet. The three cases raise the same error.
        """
        pet = await self._find_owned(db, user_id, pet_id)
        if pet is None:
            logger.info(f"Pet {pet_id} not found for user {user_id}")
            raise PetNotFoundError(pet_id)
        return pet

    async def find_by_nft_id(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        nft_id: str
    ) -> Pet:
        """
        Get an active pet by its NFT identifier.

        Unlike find_by_id this lookup is not filtered by owner: any
        authenticated user can resolve any pet from its NFT identifier.

        Raises:
            PetNotFoundError: no active pet carries that identifier.
        """
        query = Pet.active().where(Pet.nft_id == nft_id).limit(1)
        result = await db.execute(query)
        pet = result.scalar_one_or_none()
        if pet is None:
            logger.info(f"No pet with NFT id {nft_id!r} (requested by user {user_id})")
            raise PetNotFoundError(nft_id)
        return pet

    async def update(
        self,
        db: AsyncSession,
        pet_id: Optional[uuid.UUID],
        user_id: uuid.UUID,
        body: PetUpdate
    ) -> Pet:
        """
        Create a pet (no pet_id) or update an existing one.

        Only fields present and non-empty in the body overwrite stored
        values; a field cannot be cleared through this operation.

        Raises:
            PetNotFoundError: pet_id does not resolve to an updatable pet.
            PetValidationError: the body breaks one or more field rules.
                Nothing is written in that case.
        """
        creating = pet_id is None
        if creating:
            pet = Pet(user_id=user_id)
        else:
            pet = await self._load_update_target(db, user_id, pet_id)
            if pet is None:
                logger.info(f"Update target {pet_id} not found for user {user_id}")
                raise PetNotFoundError(pet_id)

        errors = self.validate_update(body, creating=creating)
        if errors:
            logger.info(
                f"Rejected pet {'creation' if creating else pet_id} for user {user_id}: "
                f"{', '.join(error.path for error in errors)}"
            )
            raise PetValidationError(errors)

        self._apply(pet, body)
        await self._save(db, pet)

        if creating:
            logger.info(f"Created pet {pet.id} for user {user_id}")
        else:
            logger.info(f"Updated pet {pet.id} by user {user_id}")
        return pet

    async def remove(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        pet_id: uuid.UUID
    ) -> None:
        """
        Soft delete one of the user's active pets.

        Raises:
            PetNotFoundError: the pet is not an active pet of the user,
                which includes a pet that was already deleted.
        """
        pet = await self._find_owned(db, user_id, pet_id)
        if pet is None:
            logger.info(f"Delete target {pet_id} not found for user {user_id}")
            raise PetNotFoundError(pet_id)

        pet.disable()
        await self._save(db, pet)
        logger.info(f"Disabled pet {pet_id} by user {user_id}")

    def validate_update(
        self,
        body: PetUpdate,
        creating: bool = False
    ) -> List[FieldError]:
        """
        Check a pet body against the field rules.

        Every rule is evaluated; the returned list holds one entry per
        violated field and is empty when the body is valid.
        """
        errors: List[FieldError] = []

        for attribute, path, max_length in FIELD_LIMITS:
            value = getattr(body, attribute)
            if value and len(value) > max_length:
                errors.append(
                    FieldError(
                        path=path,
                        message=f"Up to {max_length} characters only."
                    )
                )

        # An over-long name already carries its error
        name_reported = any(error.path == "name" for error in errors)
        if creating and not name_reported and not (body.name and body.name.strip()):
            errors.insert(0, FieldError(path="name", message="Name is required."))

        return errors

    async def _find_owned(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        pet_id: uuid.UUID
    ) -> Optional[Pet]:
        query = Pet.active().where(Pet.id == pet_id, Pet.user_id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def _load_update_target(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        pet_id: uuid.UUID
    ) -> Optional[Pet]:
        if self.strict_ownership:
            return await self._find_owned(db, user_id, pet_id)
        return await db.get(Pet, pet_id)

    @staticmethod
    def _apply(pet: Pet, body: PetUpdate) -> None:
        for field in UPDATABLE_FIELDS:
            value = getattr(body, field)
            if field in TRIMMED_FIELDS and value:
                value = value.strip()
            if value:
                setattr(pet, field, value)

    @staticmethod
    async def _save(db: AsyncSession, pet: Pet) -> None:
        if inspect(pet).persistent:
            # Mark the row dirty so the `updated` hook runs even when no
            # other column changed.
            flag_modified(pet, "updated")
        else:
            db.add(pet)
        await db.commit()
