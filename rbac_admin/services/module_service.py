"""
Module Service

Modules group forms in the navigation. A user's modules are derived from
their active role assignments, see ModuleRepository.get_by_user_id.
"""

from typing import Optional

from rbac_admin.core.exceptions import DomainError
from rbac_admin.db.models import Module
from rbac_admin.db.repositories import ModuleRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import ModuleDto


class ModuleService(ActivatableService[ModuleDto, Module]):
    entity_name = "Module"
    dto_model = ModuleDto
    entity_model = Module
    repository_class = ModuleRepository

    required_text = ("name",)

    repository: ModuleRepository

    async def get_by_user_id(self, user_id: int) -> list[ModuleDto]:
        """Modules reachable by the user through roles, permissions and forms."""
        self._validate_id(user_id, "module lookup by user", field="user_id")

        try:
            modules = await self.repository.get_by_user_id(user_id)
            return self.to_dto_list(modules)
        except DomainError:
            raise
        except Exception as e:
            raise self._unexpected(e, f"Error retrieving modules of user {user_id}") from e

    async def update_details(
        self,
        entity_id: int,
        name: str,
        description: Optional[str],
        status: Optional[str]
    ) -> ModuleDto:
        return await self.update_fields(
            entity_id,
            name=name,
            description=description,
            status=status
        )
