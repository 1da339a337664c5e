"""
Role Service

Roles group users (through role assignments) and carry form permissions.
"""

from typing import Optional

from rbac_admin.core import validators
from rbac_admin.core.exceptions import DomainError, ValidationError
from rbac_admin.db.models import Role
from rbac_admin.db.repositories import RoleRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import RoleDto


class RoleService(ActivatableService[RoleDto, Role]):
    entity_name = "Role"
    dto_model = RoleDto
    entity_model = Role
    repository_class = RoleRepository

    required_text = ("role_name",)

    repository: RoleRepository

    async def get_by_name(self, role_name: str) -> Optional[RoleDto]:
        """
        Look a role up by its exact name.

        Returns:
            The role, or None when no role has that name
        """
        try:
            validators.require_text(role_name, "role_name")
        except ValidationError:
            self.logger.warning("Rejected role lookup with an empty name")
            raise

        try:
            role = await self.repository.get_by_name(role_name)
            if role is None:
                self.logger.info(f"No Role found with name {role_name!r}")
                return None
            return self.to_dto(role)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving role {role_name!r}") from e

    async def get_by_user_id(self, user_id: int) -> list[RoleDto]:
        """Roles the user holds through active role assignments."""
        self._validate_id(user_id, "role lookup by user", field="user_id")

        try:
            roles = await self.repository.get_by_user_id(user_id)
            return self.to_dto_list(roles)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving roles of user {user_id}") from e

    async def update_details(
        self,
        entity_id: int,
        role_name: str,
        description: Optional[str]
    ) -> RoleDto:
        return await self.update_fields(entity_id, role_name=role_name, description=description)
