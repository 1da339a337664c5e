"""
User Notification Service

Notifications are created unread and visible. Hiding a notification removes
it from listings without deleting it; it stays reachable by id.
"""

from rbac_admin.core.exceptions import DomainError
from rbac_admin.db.models import UserNotification
from rbac_admin.db.repositories import UserNotificationRepository
from rbac_admin.services.base import ListPolicy, ServiceBase
from rbac_admin.services.dtos import UserNotificationDto


class UserNotificationService(ServiceBase[UserNotificationDto, UserNotification]):
    entity_name = "UserNotification"
    dto_model = UserNotificationDto
    entity_model = UserNotification
    repository_class = UserNotificationRepository
    list_policy = ListPolicy.VISIBLE_ONLY

    required_text = ("message",)
    positive_fields = ("user_id",)
    creatable_fields = frozenset({"user_id", "message"})
    updatable_fields = frozenset({"message", "is_read"})

    def build_entity(self, dto: UserNotificationDto) -> UserNotification:
        notification = super().build_entity(dto)
        notification.is_read = False
        notification.is_hidden = False
        return notification

    async def update_visibility(self, entity_id: int, is_hidden: bool) -> UserNotificationDto:
        """
        Hide or unhide a notification.

        Raises:
            ValidationError: If entity_id <= 0
            EntityNotFoundError: If the notification does not exist
            ExternalServiceError: If the store fails or reports no row written
        """
        self._validate_id(entity_id, "visibility change")

        try:
            entity = await self._get_existing(entity_id)
            entity.is_hidden = is_hidden
            await self._persist(entity, "update the visibility of")
            return self.to_dto(entity)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(
                e, f"Error changing visibility of {self.entity_name} with id {entity_id}"
            ) from e
