"""Payment history service."""

from rbac_admin.db.models import PaymentHistory
from rbac_admin.db.repositories import PaymentHistoryRepository
from rbac_admin.services.base import ActivatableService
from rbac_admin.services.dtos import PaymentHistoryDto


class PaymentHistoryService(ActivatableService[PaymentHistoryDto, PaymentHistory]):
    entity_name = "PaymentHistory"
    dto_model = PaymentHistoryDto
    entity_model = PaymentHistory
    repository_class = PaymentHistoryRepository

    positive_fields = ("user_id", "amount")
    required_dates = ("payment_date",)
