"""Permission Service."""

from rbac_admin.db.models import Permission
from rbac_admin.db.repositories import PermissionRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import PermissionDto


class PermissionService(ActivatableService[PermissionDto, Permission]):
    entity_name = "Permission"
    dto_model = PermissionDto
    entity_model = Permission
    repository_class = PermissionRepository

    required_text = ("name",)
