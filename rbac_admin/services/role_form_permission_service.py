"""
Role-Form-Permission Service

Grants are plain rows with CRUD flags; there is no is_active flag, so they
are always hard-deleted and always listed.
"""

from rbac_admin.db.models import RoleFormPermission
from rbac_admin.db.repositories import RoleFormPermissionRepository
from rbac_admin.services.base import ServiceBase
from rbac_admin.services.dtos import RoleFormPermissionDto


class RoleFormPermissionService(ServiceBase[RoleFormPermissionDto, RoleFormPermission]):
    entity_name = "RoleFormPermission"
    dto_model = RoleFormPermissionDto
    entity_model = RoleFormPermission
    repository_class = RoleFormPermissionRepository

    positive_fields = ("role_id", "form_id", "permission_id")
