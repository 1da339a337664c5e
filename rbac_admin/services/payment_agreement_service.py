"""
Payment Agreement Service

Instalment agreements. Only active agreements are listed.
"""

from decimal import Decimal
from typing import Optional

from rbac_admin.db.models import PaymentAgreement
from rbac_admin.db.repositories import PaymentAgreementRepository
from rbac_admin.services.base import ActivatableService, ListPolicy
from rbac_admin.services.dtos import PaymentAgreementDto


class PaymentAgreementService(ActivatableService[PaymentAgreementDto, PaymentAgreement]):
    entity_name = "PaymentAgreement"
    dto_model = PaymentAgreementDto
    entity_model = PaymentAgreement
    repository_class = PaymentAgreementRepository
    list_policy = ListPolicy.ACTIVE_ONLY

    required_text = ("address",)
    positive_fields = ("finance_amount",)

    async def update_partial(
        self,
        entity_id: int,
        address: Optional[str] = None,
        neighborhood: Optional[str] = None,
        finance_amount: Optional[Decimal] = None,
        agreement_description: Optional[str] = None
    ) -> PaymentAgreementDto:
        """Update the given fields only; None means "leave unchanged"."""
        changes = {
            field: value
            for field, value in (
                ("address", address),
                ("neighborhood", neighborhood),
                ("finance_amount", finance_amount),
                ("agreement_description", agreement_description),
            )
            if value is not None
        }
        return await self.update_fields(entity_id, **changes)
