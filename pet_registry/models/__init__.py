"""SQLAlchemy models for the application."""
from pet_registry.models.user import User
from pet_registry.models.pet import Pet, PetStatus

__all__ = [
    "User",
    "Pet",
    "PetStatus",
]
