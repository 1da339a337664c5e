"""
Role Assignment Service

Links users to roles. Deleting an assignment only deactivates it, so the
assignment history stays queryable and role/module lookups (which follow
active assignments only) stop granting access immediately.
"""

from rbac_admin.core.exceptions import DomainError
from rbac_admin.db.models import RoleUser
from rbac_admin.db.repositories import RoleUserRepository
from rbac_admin.services.base import ActivatableService, DeletePolicy
from rbac_admin.services.dtos import RoleUserDto


class RoleUserService(ActivatableService[RoleUserDto, RoleUser]):
    entity_name = "RoleUser"
    dto_model = RoleUserDto
    entity_model = RoleUser
    repository_class = RoleUserRepository
    delete_policy = DeletePolicy.SOFT

    positive_fields = ("role_id", "user_id")

    repository: RoleUserRepository

    async def get_by_user_id(self, user_id: int) -> list[RoleUserDto]:
        self._validate_id(user_id, "assignment lookup by user", field="user_id")

        try:
            return self.to_dto_list(await self.repository.get_by_user_id(user_id))
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving role assignments of user {user_id}") from e

    async def get_by_role_id(self, role_id: int) -> list[RoleUserDto]:
        self._validate_id(role_id, "assignment lookup by role", field="role_id")

        try:
            return self.to_dto_list(await self.repository.get_by_role_id(role_id))
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving role assignments of role {role_id}") from e

    async def has_role(self, user_id: int, role_id: int) -> bool:
        """
        Membership check: does the user hold the role right now?

        Soft-deleted (inactive) assignments do not count.

        Raises:
            ValidationError: If either id is not positive (no store call)
            ExternalServiceError: If the store fails
        """
        self._validate_id(user_id, "role membership check", field="user_id")
        self._validate_id(role_id, "role membership check", field="role_id")

        try:
            return await self.repository.has_role(user_id, role_id)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error checking role {role_id} of user {user_id}") from e
