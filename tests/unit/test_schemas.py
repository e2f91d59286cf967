"""Unit tests for pet request/response schemas."""

import uuid
from datetime import date

import pytest
from pydantic import ValidationError

from pet_registry.models.pet import Pet
from pet_registry.schemas.pet import PetCreated, PetRead, PetUpdate, PetUpdated


class TestPetUpdate:
    """Request body parsing."""

    def test_accepts_camel_case_keys(self):
        body = PetUpdate.model_validate({
            "name": "Rex",
            "birthDate": "2020-05-01",
            "nftId": "nft-42",
            "ownerName": "Ana",
            "ownerId": "DNI123",
        })

        assert body.birth_date == date(2020, 5, 1)
        assert body.nft_id == "nft-42"
        assert body.owner_name == "Ana"
        assert body.owner_id == "DNI123"

    def test_accepts_snake_case_keys(self):
        body = PetUpdate.model_validate({"nft_id": "nft-42", "owner_name": "Ana"})

        assert body.nft_id == "nft-42"
        assert body.owner_name == "Ana"

    def test_all_fields_are_optional(self):
        body = PetUpdate.model_validate({})

        assert body.model_dump() == {
            "name": None,
            "description": None,
            "birth_date": None,
            "nft_id": None,
            "owner_name": None,
            "owner_id": None,
        }

    def test_lengths_are_not_checked_by_schema(self):
        """Length rules belong to the service so that all errors are reported together."""
        body = PetUpdate(name="n" * 1000)

        assert len(body.name) == 1000

    def test_invalid_birth_date_is_rejected(self):
        with pytest.raises(ValidationError):
            PetUpdate.model_validate({"birthDate": "not-a-date"})


class TestPetResponses:
    """Response projections built from Pet records."""

    def _pet(self) -> Pet:
        return Pet(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            name="Rex",
            nft_id="nft-42",
            owner_name="Ana",
            owner_id="DNI123",
        )

    def test_read_projection_uses_camel_case(self):
        pet = self._pet()

        data = PetRead.model_validate(pet).model_dump(mode="json", by_alias=True)

        assert data == {
            "id": str(pet.id),
            "name": "Rex",
            "description": "",
            "birthDate": None,
            "nftId": "nft-42",
            "ownerName": "Ana",
            "ownerId": "DNI123",
        }

    def test_updated_projection_omits_nft_id(self):
        data = PetUpdated.model_validate(self._pet()).model_dump(by_alias=True)

        assert "nftId" not in data
        assert set(data) == {"id", "name", "description", "birthDate", "ownerName", "ownerId"}

    def test_created_projection_is_only_the_id(self):
        pet = self._pet()

        data = PetCreated.model_validate(pet).model_dump(mode="json", by_alias=True)

        assert data == {"id": str(pet.id)}
