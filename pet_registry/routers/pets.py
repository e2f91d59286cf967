"""
Pets router for managing the current user's pet records.

This module maps HTTP routes onto PetService:
- Listing the caller's pets
- Creating and updating pet records
- Reading a pet by id, or by NFT identifier across all owners
- Soft deletion of pets
"""
import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pet_registry.database import get_async_session
from pet_registry.dependencies import current_active_user, get_pet_service
from pet_registry.models.pet import Pet
from pet_registry.models.user import User
from pet_registry.schemas.pet import (
    PetCreated,
    PetRead,
    PetUpdate,
    PetUpdated,
)
from pet_registry.services.pet_service import PetService


router = APIRouter(
    prefix="/v1/pet",
    tags=["pets"],
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Pet not found"},
        422: {"description": "Validation error"},
    }
)


@router.get("", response_model=List[PetRead])
async def list_pets(
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    pet_service: PetService = Depends(get_pet_service),
) -> List[Pet]:
    """
    List all pets owned by the authenticated user.

    Deleted pets are never included. There is no pagination.
    """
    return await pet_service.find_by_current_user(session, user.id)


@router.post("", response_model=PetCreated, status_code=status.HTTP_201_CREATED)
async def create_pet(
    pet_data: PetUpdate,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    pet_service: PetService = Depends(get_pet_service),
) -> Pet:
    """
    Create a new pet owned by the authenticated user.

    **Required fields:**
    - name: Pet's name (up to 256 characters)

    **Optional fields:**
    - description: up to 1024 characters
    - birthDate: ISO date
    - nftId: NFT identifier, up to 100 characters
    - ownerName: real-world owner name, up to 100 characters
    - ownerId: real-world owner identity document, up to 100 characters

    **Example:**
    ```json
    {
        "name": "Rex",
        "nftId": "nft-42",
        "ownerName": "Ana",
        "ownerId": "DNI123"
    }
    ```

    **Returns:** The generated pet id
    """
    return await pet_service.update(session, None, user.id, pet_data)


@router.get("/nft/{nft_id}", response_model=PetRead)
async def get_pet_by_nft_id(
    nft_id: str,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    pet_service: PetService = Depends(get_pet_service),
) -> Pet:
    """
    Get a pet by its NFT identifier.

    Any authenticated user can resolve any pet this way, whoever owns it.
    """
    return await pet_service.find_by_nft_id(session, user.id, nft_id)


@router.get("/{pet_id}", response_model=PetRead)
async def get_pet(
    pet_id: uuid.UUID,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    pet_service: PetService = Depends(get_pet_service),
) -> Pet:
    """
    Get a single pet by ID.

    The pet must be owned by the authenticated user.
    """
    return await pet_service.find_by_id(session, user.id, pet_id)


@router.post("/{pet_id}", response_model=PetUpdated)
async def update_pet(
    pet_id: uuid.UUID,
    pet_update: PetUpdate,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    pet_service: PetService = Depends(get_pet_service),
) -> Pet:
    """
    Update a pet record.

    Only fields that are provided and non-empty are updated; the others
    keep their stored value.
    """
    return await pet_service.update(session, pet_id, user.id, pet_update)


@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pet(
    pet_id: uuid.UUID,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    pet_service: PetService = Depends(get_pet_service),
) -> None:
    """
    Soft delete a pet record.

    The pet must be owned by the authenticated user. It is kept in the
    database but no longer returned by any endpoint. Deleting it again
    returns 404.
    """
    await pet_service.remove(session, user.id, pet_id)
