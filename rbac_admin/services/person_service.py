"""
Person Service

Persons are the natural people behind users, payments and infractions.
Besides CRUD, persons can be looked up by document number and renamed
through a partial update.
"""

from typing import Optional

from rbac_admin.core import validators
from rbac_admin.core.exceptions import DomainError, ValidationError
from rbac_admin.db.models import Person
from rbac_admin.db.repositories import PersonRepository
from rbac_admin.services.base import ActivatableService, ListPolicy
from rbac_admin.services.dtos import PersonDto


class PersonService(ActivatableService[PersonDto, Person]):
    """
    Service for persons.

    Listing is an admin view: inactive persons stay visible so they can be
    reactivated.
    """

    entity_name = "Person"
    dto_model = PersonDto
    entity_model = Person
    repository_class = PersonRepository
    list_policy = ListPolicy.ALL

    required_text = ("first_name", "last_name", "document_number")

    repository: PersonRepository

    async def get_by_document_number(self, document_number: str) -> list[PersonDto]:
        """
        Find persons by document number.

        Returns:
            Matching persons (possibly empty)

        Raises:
            ValidationError: If document_number is empty
            ExternalServiceError: If the store fails
        """
        try:
            validators.require_text(document_number, "document_number")
        except ValidationError:
            self.logger.warning("Rejected person lookup with an empty document number")
            raise

        try:
            persons = await self.repository.get_by_document_number(document_number.strip())
            return self.to_dto_list(persons)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving persons with document {document_number}") from e

    async def update_partial(
        self,
        entity_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> PersonDto:
        """Rename a person; omitted names are left unchanged."""
        changes = {}
        if first_name is not None:
            changes["first_name"] = first_name
        if last_name is not None:
            changes["last_name"] = last_name
        return await self.update_fields(entity_id, **changes)
