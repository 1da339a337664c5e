"""
Bill Service

Bills issued for fines or payment agreements. Only active bills are listed.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from rbac_admin.db.models import Bill
from rbac_admin.db.repositories import BillRepository
from rbac_admin.services.base import ActivatableService, ListPolicy
from rbac_admin.services.dtos import BillDto


class BillService(ActivatableService[BillDto, Bill]):
    entity_name = "Bill"
    dto_model = BillDto
    entity_model = Bill
    repository_class = BillRepository
    list_policy = ListPolicy.ACTIVE_ONLY

    required_text = ("barcode",)
    positive_fields = ("total_value",)
    required_dates = ("issue_date", "expiration_date")

    async def update_details(
        self,
        entity_id: int,
        barcode: str,
        issue_date: datetime,
        expiration_date: datetime,
        total_value: Decimal,
        state: Optional[str]
    ) -> BillDto:
        return await self.update_fields(
            entity_id,
            barcode=barcode,
            issue_date=issue_date,
            expiration_date=expiration_date,
            total_value=total_value,
            state=state
        )
