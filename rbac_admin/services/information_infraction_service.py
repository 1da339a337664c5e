"""Fine computation inputs (SMLDV based)."""

from rbac_admin.db.models import InformationInfraction
from rbac_admin.db.repositories import InformationInfractionRepository
from rbac_admin.services.base import ServiceBase
from rbac_admin.services.dtos import InformationInfractionDto


class InformationInfractionService(
    ServiceBase[InformationInfractionDto, InformationInfraction]
):
    entity_name = "InformationInfraction"
    dto_model = InformationInfractionDto
    entity_model = InformationInfraction
    repository_class = InformationInfractionRepository

    positive_fields = ("number_smldv", "minimum_wage", "value_smldv", "total_value")
