"""
User Service

Business rules for login accounts. A user always belongs to a person, so
create and update verify that the referenced person exists before writing.
"""

from rbac_admin.core.exceptions import ValidationError
from rbac_admin.db.models import User
from rbac_admin.db.repositories import UserRepository
from rbac_admin.services.base import ActivatableService, ListPolicy
from rbac_admin.services.dtos import UserDto


class UserService(ActivatableService[UserDto, User]):
    """
    Service for users.

    Listing returns inactive users too: the admin screen toggles them back.
    """

    entity_name = "User"
    dto_model = UserDto
    entity_model = User
    repository_class = UserRepository
    list_policy = ListPolicy.ALL

    required_text = ("username", "email", "password")
    positive_fields = ("person_id",)

    repository: UserRepository

    async def _require_person(self, person_id: int) -> None:
        if not await self.repository.person_exists(person_id):
            self.logger.warning(f"Person {person_id} referenced by a user does not exist")
            raise ValidationError("person_id", "The referenced person does not exist")

    async def before_create(self, dto: UserDto) -> None:
        await self._require_person(dto.person_id)

    async def before_update(self, dto: UserDto, entity: User) -> None:
        await self._require_person(dto.person_id)
