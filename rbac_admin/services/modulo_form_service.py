"""Module-form junction service."""

from rbac_admin.db.models import ModuloForm
from rbac_admin.db.repositories import ModuloFormRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import ModuloFormDto


class ModuloFormService(ActivatableService[ModuloFormDto, ModuloForm]):
    entity_name = "ModuloForm"
    dto_model = ModuloFormDto
    entity_model = ModuloForm
    repository_class = ModuloFormRepository

    positive_fields = ("form_id", "module_id")
