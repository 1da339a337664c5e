"""
Access Log Service

Audit trail of user actions. Entries are stamped by the service when they
are written; the caller never supplies the timestamp.
"""

from typing import Optional

from rbac_admin.core.exceptions import DomainError
from rbac_admin.db.models import AccessLog
from rbac_admin.db.repositories import AccessLogRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import AccessLogDto


class AccessLogService(ActivatableService[AccessLogDto, AccessLog]):
    entity_name = "AccessLog"
    dto_model = AccessLogDto
    entity_model = AccessLog
    repository_class = AccessLogRepository

    required_text = ("action",)
    positive_fields = ("user_id",)
    updatable_fields = frozenset({"action", "status", "details"})

    repository: AccessLogRepository

    def build_entity(self, dto: AccessLogDto) -> AccessLog:
        entry = super().build_entity(dto)
        entry.timestamp = entry.created_at
        return entry

    async def create_for_user(
        self,
        dto: AccessLogDto,
        user_id: int,
        details: Optional[str] = None
    ) -> AccessLogDto:
        """
        Record an action on behalf of a user.

        Args:
            dto: The entry; its user_id is replaced by `user_id`
            user_id: The acting user
            details: Optional free text, overrides dto.details when given

        Returns:
            The created entry
        """
        self._validate_id(user_id, "access log", field="user_id")

        changes = {"user_id": user_id}
        if details is not None:
            changes["details"] = details
        entry = dto.model_copy(update=changes) if dto is not None else None
        return await self.create(entry)

    async def update_details(
        self,
        entity_id: int,
        action: str,
        status: bool,
        details: Optional[str]
    ) -> AccessLogDto:
        return await self.update_fields(entity_id, action=action, status=status, details=details)

    async def get_by_user_id(self, user_id: int) -> list[AccessLogDto]:
        """Entries of one user, newest first."""
        self._validate_id(user_id, "access log lookup by user", field="user_id")

        try:
            return self.to_dto_list(await self.repository.get_by_user_id(user_id))
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving access logs of user {user_id}") from e
