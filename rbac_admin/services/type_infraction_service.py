"""Infraction type catalogue. Only active types are listed."""

from rbac_admin.db.models import TypeInfraction
from rbac_admin.db.repositories import TypeInfractionRepository
from rbac_admin.services.base import ActivatableService, ListPolicy
from rbac_admin.services.dtos import TypeInfractionDto


class TypeInfractionService(ActivatableService[TypeInfractionDto, TypeInfraction]):
    entity_name = "TypeInfraction"
    dto_model = TypeInfractionDto
    entity_model = TypeInfraction
    repository_class = TypeInfractionRepository
    list_policy = ListPolicy.ACTIVE_ONLY

    required_text = ("type_violation",)
    positive_fields = ("user_id", "value_infraction")
