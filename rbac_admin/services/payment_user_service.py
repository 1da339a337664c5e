"""Payments made by persons. Not activatable: always hard-deleted."""

from rbac_admin.db.models import PaymentUser
from rbac_admin.db.repositories import PaymentUserRepository
from rbac_admin.services.base import ServiceBase
from rbac_admin.services.dtos import PaymentUserDto


class PaymentUserService(ServiceBase[PaymentUserDto, PaymentUser]):
    entity_name = "PaymentUser"
    dto_model = PaymentUserDto
    entity_model = PaymentUser
    repository_class = PaymentUserRepository

    positive_fields = ("person_id", "amount")
    required_dates = ("payment_date",)
