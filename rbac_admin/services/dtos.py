"""
Data Transfer Objects

Pydantic models exposed to callers of the service layer. A DTO declares
exactly the fields callers may see; mapping from an entity copies only
these, so entity-only columns never leak.

Design Decisions:
- Fields default to "empty" values (0, "", None) instead of being required,
  so an incomplete payload reaches the service and is rejected there with a
  ValidationError naming the field, rather than failing inside pydantic
- `version` carries the row version the DTO was read at; sending it back on
  update enables the stale-write check
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DtoBase(BaseModel):
    """Fields every DTO carries."""
    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    version: Optional[int] = None


class UserDto(DtoBase):
    username: str = ""
    email: str = ""
    password: str = ""
    person_id: int = 0
    is_active: bool = True


class PersonDto(DtoBase):
    first_name: str = ""
    last_name: str = ""
    document_number: str = ""
    document_type: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True


class RoleDto(DtoBase):
    role_name: str = ""
    description: Optional[str] = None
    is_active: bool = True


class PermissionDto(DtoBase):
    name: str = ""
    description: Optional[str] = None
    is_active: bool = True


class FormDto(DtoBase):
    name: str = ""
    description: Optional[str] = None
    status: Optional[str] = None
    date_creation: Optional[datetime] = None
    is_active: bool = True


class ModuleDto(DtoBase):
    name: str = ""
    description: Optional[str] = None
    status: Optional[str] = None
    is_active: bool = True


class ModuloFormDto(DtoBase):
    form_id: int = 0
    module_id: int = 0
    is_active: bool = True


class RoleUserDto(DtoBase):
    role_id: int = 0
    user_id: int = 0
    is_active: bool = True


class RoleFormPermissionDto(DtoBase):
    role_id: int = 0
    form_id: int = 0
    permission_id: int = 0
    can_create: bool = False
    can_read: bool = False
    can_update: bool = False
    can_delete: bool = False


class AccessLogDto(DtoBase):
    user_id: int = 0
    action: str = ""
    status: bool = False
    details: Optional[str] = None
    timestamp: Optional[datetime] = None
    is_active: bool = True


class UserNotificationDto(DtoBase):
    user_id: int = 0
    message: str = ""
    is_read: bool = False
    is_hidden: bool = False


class TypeInfractionDto(DtoBase):
    user_id: int = 0
    type_violation: str = ""
    value_infraction: Decimal = Decimal("0")
    description: Optional[str] = None
    information_fine: Optional[str] = None
    is_active: bool = True


class StateInfractionDto(DtoBase):
    infraction_id: int = 0
    person_id: int = 0
    date_violation: Optional[datetime] = None
    fine_value: Decimal = Decimal("0")
    state: str = ""
    document_number: Optional[str] = None  # filled by document-number lookups
    is_active: bool = True


class InformationInfractionDto(DtoBase):
    number_smldv: int = 0
    minimum_wage: Decimal = Decimal("0")
    value_smldv: Decimal = Decimal("0")
    total_value: Decimal = Decimal("0")


class BillDto(DtoBase):
    barcode: str = ""
    issue_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    total_value: Decimal = Decimal("0")
    state: Optional[str] = None
    payment_agreement_id: Optional[int] = None
    is_active: bool = True


class PaymentAgreementDto(DtoBase):
    address: str = ""
    neighborhood: Optional[str] = None
    finance_amount: Decimal = Decimal("0")
    agreement_description: Optional[str] = None
    is_active: bool = True


class PaymentHistoryDto(DtoBase):
    user_id: int = 0
    amount: Decimal = Decimal("0")
    payment_date: Optional[datetime] = None
    note: Optional[str] = None
    information_infraction_id: Optional[int] = None
    is_active: bool = True


class PaymentUserDto(DtoBase):
    person_id: int = 0
    amount: Decimal = Decimal("0")
    payment_date: Optional[datetime] = None
    bill_id: Optional[int] = None
    payment_agreement_id: Optional[int] = None
    type_payment_id: Optional[int] = None


class TypePaymentDto(DtoBase):
    name: str = ""
    description: Optional[str] = None
    is_active: bool = True
