"""Payment type catalogue. Only active types are listed."""

from typing import Optional

from rbac_admin.db.models import TypePayment
from rbac_admin.db.repositories import TypePaymentRepository
from rbac_admin.services.base import ActivatableService, ListPolicy
from rbac_admin.services.dtos import TypePaymentDto


class TypePaymentService(ActivatableService[TypePaymentDto, TypePayment]):
    entity_name = "TypePayment"
    dto_model = TypePaymentDto
    entity_model = TypePayment
    repository_class = TypePaymentRepository
    list_policy = ListPolicy.ACTIVE_ONLY

    required_text = ("name",)

    async def update_details(
        self,
        entity_id: int,
        name: str,
        description: Optional[str]
    ) -> TypePaymentDto:
        return await self.update_fields(entity_id, name=name, description=description)
