"""
Generic Service Base

This module holds the one implementation of the CRUD contract shared by every
entity service. A concrete service is a small subclass that declares what
differs per entity; everything else (validation flow, existence checks,
mapping, logging, error translation) lives here.

A concrete service declares:
- entity_name, dto_model, entity_model, repository_class
- validation rules: required_text, positive_fields, required_dates
  (plus an optional validate() override)
- list_policy: which rows get_all() returns
- delete_policy: hard delete or soft delete (is_active = False)
- hooks: before_create / before_update for cross-entity checks

Design Decisions:
- Capabilities are declared, not discovered. Entities whose model inherits
  ActiveFlagMixin get ActivatableService.set_active_status; policies that
  need a flag the model lacks fail with TypeError when the service class is
  defined, not at request time.
- Domain errors (ValidationError, EntityNotFoundError,
  BusinessRuleViolationError, ExternalServiceError) propagate unchanged.
  Anything else is logged and wrapped in ExternalServiceError.
- Logging: warning before a validation failure, info on not-found, error
  (with traceback) on unexpected failures.
"""

import logging
from enum import Enum
from typing import Any, ClassVar, Generic, Iterable, Optional, TypeVar, cast

from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    ExternalServiceError,
    ValidationError,
)
from rbac_admin.core.setting import settings
from rbac_admin.core import validators
from rbac_admin.db.models import ActiveFlagMixin, EntityBase, HiddenFlagMixin, utcnow
from rbac_admin.db.repository import ModelT, Repository, SQLModelRepository
from rbac_admin.services.dtos import DtoBase

DtoT = TypeVar("DtoT", bound=DtoBase)

# Never copied between DTO and entity: owned by the store or stamped here.
_MANAGED_FIELDS = frozenset({"id", "version", "created_at"})
# Changed only through dedicated operations (set_active_status, visibility).
_FLAG_FIELDS = frozenset({"is_active", "is_hidden"})


class ListPolicy(str, Enum):
    """Which rows get_all() returns."""
    ALL = "all"
    ACTIVE_ONLY = "active_only"
    VISIBLE_ONLY = "visible_only"


class DeletePolicy(str, Enum):
    """What delete() does to the row."""
    HARD = "hard"
    SOFT = "soft"


class ServiceBase(Generic[DtoT, ModelT]):
    """
    CRUD service over a single repository.

    Subclasses must set entity_name, dto_model, entity_model and
    repository_class.
    """

    entity_name: ClassVar[str]
    dto_model: ClassVar[type[DtoBase]]
    entity_model: ClassVar[type[EntityBase]]
    repository_class: ClassVar[type[SQLModelRepository]]

    list_policy: ClassVar[ListPolicy] = ListPolicy.ALL
    delete_policy: ClassVar[DeletePolicy] = DeletePolicy.HARD

    required_text: ClassVar[tuple[str, ...]] = ()
    positive_fields: ClassVar[tuple[str, ...]] = ()
    required_dates: ClassVar[tuple[str, ...]] = ()

    # None means "every field the DTO and the entity share"
    creatable_fields: ClassVar[Optional[frozenset[str]]] = None
    updatable_fields: ClassVar[Optional[frozenset[str]]] = None

    _creatable: ClassVar[frozenset[str]] = frozenset()
    _updatable: ClassVar[frozenset[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        model = getattr(cls, "entity_model", None)
        if model is None:
            return

        needs_active_flag = (
            cls.list_policy is ListPolicy.ACTIVE_ONLY
            or cls.delete_policy is DeletePolicy.SOFT
        )
        if needs_active_flag and not issubclass(model, ActiveFlagMixin):
            raise TypeError(
                f"{cls.__name__}: {model.__name__} has no is_active flag, "
                f"cannot use {cls.list_policy.value} listing / {cls.delete_policy.value} delete"
            )
        if cls.list_policy is ListPolicy.VISIBLE_ONLY and not issubclass(model, HiddenFlagMixin):
            raise TypeError(
                f"{cls.__name__}: {model.__name__} has no is_hidden flag, "
                "cannot use visible_only listing"
            )

        shared = (set(cls.dto_model.model_fields) & set(model.model_fields)) - _MANAGED_FIELDS
        cls._creatable = (
            frozenset(cls.creatable_fields) if cls.creatable_fields is not None
            else frozenset(shared)
        )
        cls._updatable = (
            frozenset(cls.updatable_fields) if cls.updatable_fields is not None
            else frozenset(shared - _FLAG_FIELDS)
        )

    def __init__(
        self,
        repository: Repository[ModelT],
        logger: Optional[logging.Logger] = None,
        service_name: Optional[str] = None
    ):
        """
        Initialize the service.

        Args:
            repository: Data-access collaborator for this entity
            logger: Logger to use (defaults to the concrete service's module logger)
            service_name: Name reported by ExternalServiceError
                (defaults to settings.EXTERNAL_SERVICE_NAME)
        """
        self.repository = repository
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.service_name = service_name or settings.EXTERNAL_SERVICE_NAME

    @classmethod
    def from_session(cls, session: AsyncSession):
        """Build the service and its repositories on a request-scoped session."""
        return cls(cls.repository_class(session))

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @classmethod
    def to_dto(cls, entity: ModelT) -> DtoT:
        """Project an entity onto the DTO, copying only the DTO's declared fields."""
        return cast(DtoT, cls.dto_model.model_validate(entity))

    @classmethod
    def to_dto_list(cls, entities: Iterable[ModelT]) -> list[DtoT]:
        return [cls.to_dto(entity) for entity in entities]

    def build_entity(self, dto: DtoT) -> ModelT:
        """Create a new, unsaved entity from a validated DTO."""
        entity = self.entity_model(**dto.model_dump(include=set(self._creatable)))
        entity.created_at = utcnow()
        return cast(ModelT, entity)

    def apply_update(self, entity: ModelT, dto: DtoT) -> None:
        """Copy the updatable fields of the DTO onto the persisted entity."""
        for field in self._updatable:
            setattr(entity, field, getattr(dto, field))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check_field(self, field: str, value: Any) -> None:
        """Apply whichever declared rule covers `field`."""
        if field in self.required_text:
            validators.require_text(value, field)
        if field in self.positive_fields:
            validators.require_positive(value, field)
        if field in self.required_dates:
            validators.require_date(value, field)

    def validate(self, dto: DtoT) -> None:
        """
        Validate a full payload.

        Override to add entity-specific rules; call super() to keep the
        declared ones.

        Raises:
            ValidationError: On the first rule that fails
        """
        for field in (*self.required_text, *self.positive_fields, *self.required_dates):
            self.check_field(field, getattr(dto, field, None))

    def _validate_id(self, entity_id: Any, action: str, field: str = "id") -> None:
        try:
            validators.require_positive_id(entity_id, field)
        except ValidationError:
            self.logger.warning(
                f"Rejected {action} of {self.entity_name} with invalid {field}: {entity_id!r}"
            )
            raise

    def _validate_payload(self, dto: Optional[DtoT], action: str, require_id: bool = False) -> None:
        try:
            validators.require_payload(dto, self.entity_name)
            if require_id:
                validators.require_positive_id(dto.id)
            self.validate(dto)
        except ValidationError as e:
            self.logger.warning(f"Rejected {action} of {self.entity_name}: {e}")
            raise

    def _validate_changes(self, changes: dict[str, Any]) -> None:
        try:
            for field, value in changes.items():
                if field not in self._updatable:
                    raise ValidationError(field, f"{field} cannot be updated on {self.entity_name}")
                self.check_field(field, value)
        except ValidationError as e:
            self.logger.warning(f"Rejected partial update of {self.entity_name}: {e}")
            raise

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def before_create(self, dto: DtoT) -> None:
        """Cross-entity checks before a create. No-op by default."""

    async def before_update(self, dto: DtoT, entity: ModelT) -> None:
        """Cross-entity checks before an update. No-op by default."""

    def include_in_listing(self, entity: ModelT) -> bool:
        if self.list_policy is ListPolicy.ACTIVE_ONLY:
            return bool(getattr(entity, "is_active"))
        if self.list_policy is ListPolicy.VISIBLE_ONLY:
            return not getattr(entity, "is_hidden")
        return True

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    async def _get_existing(self, entity_id: int) -> ModelT:
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            self.logger.info(f"No {self.entity_name} found with id {entity_id}")
            raise EntityNotFoundError(self.entity_name, entity_id)
        return entity

    async def _persist(self, entity: ModelT, action: str) -> None:
        if not await self.repository.update(entity):
            self.logger.error(f"Store reported failure to {action} {self.entity_name} {entity.id}")
            raise ExternalServiceError(
                self.service_name,
                f"Could not {action} {self.entity_name} with id {entity.id}"
            )

    def _check_version(self, entity: ModelT, expected_version: Optional[int]) -> None:
        if expected_version is not None and expected_version != entity.version:
            self.logger.warning(
                f"Stale write on {self.entity_name} {entity.id}: "
                f"caller read version {expected_version}, store has {entity.version}"
            )
            raise BusinessRuleViolationError(
                "ConcurrencyConflict",
                f"{self.entity_name} {entity.id} was modified by another request"
            )

    def _unexpected(self, e: Exception, message: str) -> ExternalServiceError:
        self.logger.error(f"{message}: {e}", exc_info=True)
        return ExternalServiceError(self.service_name, message, original_error=e)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_all(self) -> list[DtoT]:
        """
        List entities, filtered by the service's list policy.

        Raises:
            ExternalServiceError: If the store fails
        """
        try:
            entities = await self.repository.get_all()
            return [self.to_dto(entity) for entity in entities if self.include_in_listing(entity)]
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving {self.entity_name} records") from e

    async def get_by_id(self, entity_id: int) -> DtoT:
        """
        Fetch one entity.

        Raises:
            ValidationError: If entity_id <= 0 (no store call is made)
            EntityNotFoundError: If the store has no such row
            ExternalServiceError: If the store fails
        """
        self._validate_id(entity_id, "lookup")

        try:
            entity = await self._get_existing(entity_id)
            return self.to_dto(entity)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving {self.entity_name} with id {entity_id}") from e

    async def create(self, dto: DtoT) -> DtoT:
        """
        Validate and persist a new entity.

        Returns:
            The created DTO, carrying the store-assigned id

        Raises:
            ValidationError: If the payload is missing or breaks a rule (no write)
            ExternalServiceError: If the store fails
        """
        self._validate_payload(dto, "create")

        try:
            await self.before_create(dto)
            entity = self.build_entity(dto)
            created = await self.repository.create(entity)
            self.logger.info(f"Created {self.entity_name} {created.id}")
            return self.to_dto(created)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error creating {self.entity_name}") from e

    async def update(self, dto: DtoT) -> DtoT:
        """
        Whole-DTO update: re-fetch, copy the updatable fields, persist.

        Raises:
            ValidationError: If the payload or its id is invalid (no store call)
            EntityNotFoundError: If the row does not exist (no write)
            BusinessRuleViolationError: If dto.version is stale
            ExternalServiceError: If the store fails or reports no row written
        """
        self._validate_payload(dto, "update", require_id=True)

        try:
            entity = await self._get_existing(dto.id)
            self._check_version(entity, dto.version)
            await self.before_update(dto, entity)
            self.apply_update(entity, dto)
            await self._persist(entity, "update")
            return self.to_dto(entity)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error updating {self.entity_name} with id {dto.id}") from e

    async def update_fields(self, entity_id: int, **changes: Any) -> DtoT:
        """
        Partial update: only the given fields are validated and written.

        Raises:
            ValidationError: If the id is invalid, a field is not updatable
                or a value breaks its rule (no store call)
            EntityNotFoundError: If the row does not exist (no write)
            ExternalServiceError: If the store fails or reports no row written
        """
        self._validate_id(entity_id, "update")
        self._validate_changes(changes)

        try:
            entity = await self._get_existing(entity_id)
            candidate = self.to_dto(entity).model_copy(update=changes)
            await self.before_update(candidate, entity)
            for field, value in changes.items():
                setattr(entity, field, value)
            await self._persist(entity, "update")
            return self.to_dto(entity)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error updating {self.entity_name} with id {entity_id}") from e

    async def delete(self, entity_id: int) -> DtoT:
        """
        Delete an entity according to the delete policy.

        Returns:
            The DTO as it was before deletion

        Raises:
            ValidationError: If entity_id <= 0 (no store call)
            EntityNotFoundError: If the row does not exist
            ExternalServiceError: If the store fails or reports nothing removed
        """
        self._validate_id(entity_id, "delete")

        try:
            entity = await self._get_existing(entity_id)
            removed = self.to_dto(entity)

            if self.delete_policy is DeletePolicy.SOFT:
                setattr(entity, "is_active", False)
                await self._persist(entity, "deactivate")
            elif not await self.repository.delete(entity_id):
                self.logger.error(f"Store reported failure to delete {self.entity_name} {entity_id}")
                raise ExternalServiceError(
                    self.service_name,
                    f"Could not delete {self.entity_name} with id {entity_id}"
                )

            self.logger.info(f"Deleted {self.entity_name} {entity_id} ({self.delete_policy.value})")
            return removed
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error deleting {self.entity_name} with id {entity_id}") from e


class ActivatableService(ServiceBase[DtoT, ModelT]):
    """Service for entities whose model carries the is_active flag."""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        model = getattr(cls, "entity_model", None)
        if model is not None and not issubclass(model, ActiveFlagMixin):
            raise TypeError(
                f"{cls.__name__}: {model.__name__} must inherit ActiveFlagMixin"
            )

    async def set_active_status(self, entity_id: int, is_active: bool) -> DtoT:
        """
        Activate or deactivate an entity.

        Raises:
            ValidationError: If entity_id <= 0
            EntityNotFoundError: If the row does not exist
            ExternalServiceError: If the store fails or reports no row written
        """
        self._validate_id(entity_id, "status change")

        try:
            entity = await self._get_existing(entity_id)
            setattr(entity, "is_active", is_active)
            await self._persist(entity, "update the active status of")
            return self.to_dto(entity)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(
                e, f"Error changing active status of {self.entity_name} with id {entity_id}"
            ) from e
