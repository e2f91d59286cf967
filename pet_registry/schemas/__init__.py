"""Pydantic schemas for request/response validation."""
from pet_registry.schemas.user import UserRead, UserCreate, UserUpdate
from pet_registry.schemas.pet import (
    FieldError,
    PetCreated,
    PetRead,
    PetUpdate,
    PetUpdated,
)

__all__ = [
    # User schemas
    "UserRead",
    "UserCreate",
    "UserUpdate",
    # Pet schemas
    "FieldError",
    "PetCreated",
    "PetRead",
    "PetUpdate",
    "PetUpdated",
]
