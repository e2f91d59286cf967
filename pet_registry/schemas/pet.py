"""Pet schemas for API request/response validation."""
import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON keys (snake_case also accepted)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PetUpdate(CamelModel):
    """
    Request body for creating or updating a pet.

    Every field is optional. Length limits are not enforced here: the
    service validates them so that all violations are reported together.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    birth_date: Optional[date] = None
    nft_id: Optional[str] = None
    owner_name: Optional[str] = None
    owner_id: Optional[str] = None


class PetRead(CamelModel):
    """Schema for reading pet data."""
    id: uuid.UUID
    name: str
    description: str
    birth_date: Optional[date] = None
    nft_id: str
    owner_name: str
    owner_id: str


class PetCreated(CamelModel):
    """Response for a newly created pet."""
    id: uuid.UUID


class PetUpdated(CamelModel):
    """Response for an updated pet. The NFT identifier is not echoed back."""
    id: uuid.UUID
    name: str
    description: str
    birth_date: Optional[date] = None
    owner_name: str
    owner_id: str


class FieldError(BaseModel):
    """A single field validation failure."""
    path: str
    message: str
