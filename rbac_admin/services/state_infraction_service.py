"""
State Infraction Service

An infraction committed by a person. This is the one service that needs a
second repository: infractions are validated against, and looked up
through, the persons table.

Business rules:
- The person must exist (ValidationError on person_id otherwise)
- The person must be active (BusinessRuleViolationError "PersonInactive")
- Lookup by document number returns the infractions of every person holding
  that document, each DTO carrying the document number
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core import validators
from rbac_admin.core.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    ValidationError,
)
from rbac_admin.db.models import StateInfraction
from rbac_admin.db.repositories import PersonRepository, StateInfractionRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import StateInfractionDto


class StateInfractionService(ActivatableService[StateInfractionDto, StateInfraction]):
    entity_name = "StateInfraction"
    dto_model = StateInfractionDto
    entity_model = StateInfraction
    repository_class = StateInfractionRepository

    required_text = ("state",)
    positive_fields = ("infraction_id", "person_id", "fine_value")
    required_dates = ("date_violation",)

    repository: StateInfractionRepository

    def __init__(
        self,
        repository: StateInfractionRepository,
        person_repository: PersonRepository,
        logger: Optional[logging.Logger] = None,
        service_name: Optional[str] = None
    ):
        super().__init__(repository, logger=logger, service_name=service_name)
        self.person_repository = person_repository

    @classmethod
    def from_session(cls, session: AsyncSession):
        return cls(StateInfractionRepository(session), PersonRepository(session))

    async def _require_active_person(self, person_id: int) -> None:
        person = await self.person_repository.get_by_id(person_id)
        if person is None:
            self.logger.warning(f"Person {person_id} referenced by an infraction does not exist")
            raise ValidationError("person_id", "The referenced person does not exist")
        if not person.is_active:
            self.logger.warning(f"Person {person_id} referenced by an infraction is inactive")
            raise BusinessRuleViolationError(
                "PersonInactive",
                f"Person {person_id} is inactive and cannot receive infractions"
            )

    async def before_create(self, dto: StateInfractionDto) -> None:
        await self._require_active_person(dto.person_id)

    async def before_update(self, dto: StateInfractionDto, entity: StateInfraction) -> None:
        await self._require_active_person(dto.person_id)

    async def get_by_document_number(self, document_number: str) -> list[StateInfractionDto]:
        """
        Infractions of the person(s) registered under a document number.

        Raises:
            ValidationError: If document_number is empty
            EntityNotFoundError: If no person has that document number
            ExternalServiceError: If the store fails
        """
        try:
            validators.require_text(document_number, "document_number")
        except ValidationError:
            self.logger.warning("Rejected infraction lookup with an empty document number")
            raise

        document_number = document_number.strip()
        try:
            persons = await self.person_repository.get_by_document_number(document_number)
            if not persons:
                self.logger.info(f"No Person found with document {document_number}")
                raise EntityNotFoundError("Person", document_number)

            infractions = await self.repository.get_by_person_ids([p.id for p in persons])
            return [
                self.to_dto(infraction).model_copy(update={"document_number": document_number})
                for infraction in infractions
            ]
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(
                e, f"Error retrieving infractions for document {document_number}"
            ) from e
