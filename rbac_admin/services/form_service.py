"""
Form Service

Forms are the UI screens permissions are granted on.
"""

from typing import Optional

from rbac_admin.db.models import Form
from rbac_admin.db.repositories import FormRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import FormDto


class FormService(ActivatableService[FormDto, Form]):
    entity_name = "Form"
    dto_model = FormDto
    entity_model = Form
    repository_class = FormRepository

    required_text = ("name",)
    # date_creation is stamped once, on create
    updatable_fields = frozenset({"name", "description", "status"})

    def build_entity(self, dto: FormDto) -> Form:
        form = super().build_entity(dto)
        if dto.date_creation is None:
            form.date_creation = form.created_at
        return form

    async def update_details(
        self,
        entity_id: int,
        name: str,
        description: Optional[str],
        status: Optional[str]
    ) -> FormDto:
        return await self.update_fields(
            entity_id,
            name=name,
            description=description,
            status=status
        )
