"""
Services module for business logic.

One service per entity, each a thin declaration over ServiceBase. Services
validate input, enforce business rules and translate store failures into
domain errors; they never touch HTTP concerns.
"""

from rbac_admin.services.access_log_service import AccessLogService
from rbac_admin.services.base import ActivatableService, DeletePolicy, ListPolicy, ServiceBase
from rbac_admin.services.bill_service import BillService
from rbac_admin.services.form_service import FormService
from rbac_admin.services.information_infraction_service import InformationInfractionService
from rbac_admin.services.module_service import ModuleService
from rbac_admin.services.modulo_form_service import ModuloFormService
from rbac_admin.services.payment_agreement_service import PaymentAgreementService
from rbac_admin.services.payment_history_service import PaymentHistoryService
from rbac_admin.services.payment_user_service import PaymentUserService
from rbac_admin.services.permission_service import PermissionService
from rbac_admin.services.person_service import PersonService
from rbac_admin.services.role_form_permission_service import RoleFormPermissionService
from rbac_admin.services.role_service import RoleService
from rbac_admin.services.role_user_service import RoleUserService
from rbac_admin.services.state_infraction_service import StateInfractionService
from rbac_admin.services.type_infraction_service import TypeInfractionService
from rbac_admin.services.type_payment_service import TypePaymentService
from rbac_admin.services.user_notification_service import UserNotificationService
from rbac_admin.services.user_service import UserService

__all__ = [
    "ServiceBase",
    "ActivatableService",
    "ListPolicy",
    "DeletePolicy",
    "AccessLogService",
    "BillService",
    "FormService",
    "InformationInfractionService",
    "ModuleService",
    "ModuloFormService",
    "PaymentAgreementService",
    "PaymentHistoryService",
    "PaymentUserService",
    "PermissionService",
    "PersonService",
    "RoleFormPermissionService",
    "RoleService",
    "RoleUserService",
    "StateInfractionService",
    "TypeInfractionService",
    "TypePaymentService",
    "UserNotificationService",
    "UserService",
]
