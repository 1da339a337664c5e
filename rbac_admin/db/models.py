"""
Database Models for the RBAC Admin Backend

This module defines the SQLModel database schemas for:
- Security: users, persons, roles, permissions, forms, modules and the
  junctions between them (module-form, role-user, role-form-permission)
- Audit: access logs and user notifications
- Infractions: infraction states, infraction types, infraction information
- Payments: bills, payment history, payment users, payment agreements,
  payment types

Design Decisions:
- Every table shares EntityBase: surrogate integer id, created_at stamp and
  a row version used for optimistic concurrency on updates
- Capabilities are declared by inheritance: ActiveFlagMixin marks entities
  that can be soft-deleted or toggled, HiddenFlagMixin marks entities that
  can be hidden from listings. Services check these at class definition.
- Foreign keys are declared for documentation and PostgreSQL integrity;
  SQLite does not enforce them unless PRAGMA foreign_keys is set
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class EntityBase(SQLModel):
    """
    Columns shared by every table.

    Fields:
    - id: Surrogate key assigned by the store
    - created_at: Set by the service layer when the row is created
    - version: Row version, bumped by every successful repository update
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False
    )
    version: int = Field(default=1, nullable=False)


class ActiveFlagMixin(SQLModel):
    """Entities that can be deactivated instead of (or before) being removed."""
    is_active: bool = Field(default=True, nullable=False, index=True)


class HiddenFlagMixin(SQLModel):
    """Entities that can be hidden from listings without being deactivated."""
    is_hidden: bool = Field(default=False, nullable=False)


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------

class Person(ActiveFlagMixin, EntityBase, table=True):
    """A natural person; users and infractions reference persons."""
    __tablename__ = "persons"

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    document_number: str = Field(max_length=30, index=True)
    document_type: Optional[str] = Field(default=None, max_length=20)
    phone: Optional[str] = Field(default=None, max_length=30)


class User(ActiveFlagMixin, EntityBase, table=True):
    """Login account attached to a person."""
    __tablename__ = "users"

    username: str = Field(max_length=100, index=True)
    email: str = Field(max_length=255)
    password: str = Field(max_length=255)
    person_id: int = Field(foreign_key="persons.id", index=True)


class Role(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "roles"

    role_name: str = Field(max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=500)


class Permission(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "permissions"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class Form(ActiveFlagMixin, EntityBase, table=True):
    """A UI screen that permissions are granted on."""
    __tablename__ = "forms"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[str] = Field(default=None, max_length=50)
    date_creation: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False
    )


class Module(ActiveFlagMixin, EntityBase, table=True):
    """A group of forms shown together in the UI."""
    __tablename__ = "modules"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[str] = Field(default=None, max_length=50)


class ModuloForm(ActiveFlagMixin, EntityBase, table=True):
    """Junction between modules and forms."""
    __tablename__ = "modulo_forms"

    form_id: int = Field(foreign_key="forms.id", index=True)
    module_id: int = Field(foreign_key="modules.id", index=True)


class RoleUser(ActiveFlagMixin, EntityBase, table=True):
    """Junction between roles and users."""
    __tablename__ = "role_users"

    role_id: int = Field(foreign_key="roles.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)


class RoleFormPermission(EntityBase, table=True):
    """Grants a role a permission on a form, with CRUD flags."""
    __tablename__ = "role_form_permissions"

    role_id: int = Field(foreign_key="roles.id", index=True)
    form_id: int = Field(foreign_key="forms.id", index=True)
    permission_id: int = Field(foreign_key="permissions.id", index=True)
    can_create: bool = Field(default=False)
    can_read: bool = Field(default=False)
    can_update: bool = Field(default=False)
    can_delete: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class AccessLog(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "access_logs"

    user_id: int = Field(foreign_key="users.id", index=True)
    action: str = Field(max_length=200)
    timestamp: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False
    )
    status: bool = Field(default=False)
    details: Optional[str] = Field(default=None, max_length=1000)


class UserNotification(HiddenFlagMixin, EntityBase, table=True):
    __tablename__ = "user_notifications"

    user_id: int = Field(foreign_key="users.id", index=True)
    message: str = Field(max_length=1000)
    is_read: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Infractions
# ---------------------------------------------------------------------------

class TypeInfraction(ActiveFlagMixin, EntityBase, table=True):
    """Catalogue of infraction types and their base value."""
    __tablename__ = "type_infractions"

    user_id: int = Field(foreign_key="users.id", index=True)
    type_violation: str = Field(max_length=200)
    value_infraction: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=500)
    information_fine: Optional[str] = Field(default=None, max_length=500)


class StateInfraction(ActiveFlagMixin, EntityBase, table=True):
    """An infraction committed by a person, with its fine and state."""
    __tablename__ = "state_infractions"

    infraction_id: int = Field(foreign_key="type_infractions.id", index=True)
    person_id: int = Field(foreign_key="persons.id", index=True)
    date_violation: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
    fine_value: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    state: str = Field(max_length=50)


class InformationInfraction(EntityBase, table=True):
    """Fine computation inputs expressed in daily minimum wages (SMLDV)."""
    __tablename__ = "information_infractions"

    number_smldv: int = Field(default=0)
    minimum_wage: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    value_smldv: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    total_value: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

class PaymentAgreement(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "payment_agreements"

    address: str = Field(max_length=200)
    neighborhood: Optional[str] = Field(default=None, max_length=100)
    finance_amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    agreement_description: Optional[str] = Field(default=None, max_length=500)


class Bill(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "bills"

    barcode: str = Field(max_length=100, index=True)
    issue_date: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
    expiration_date: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
    total_value: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    state: Optional[str] = Field(default=None, max_length=50)
    payment_agreement_id: Optional[int] = Field(
        default=None,
        foreign_key="payment_agreements.id"
    )


class TypePayment(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "type_payments"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class PaymentHistory(ActiveFlagMixin, EntityBase, table=True):
    __tablename__ = "payment_histories"

    user_id: int = Field(foreign_key="users.id", index=True)
    amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    payment_date: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
    note: Optional[str] = Field(default=None, max_length=500)
    information_infraction_id: Optional[int] = Field(
        default=None,
        foreign_key="information_infractions.id"
    )


class PaymentUser(EntityBase, table=True):
    """A payment made by a person against a bill or agreement."""
    __tablename__ = "payment_users"

    person_id: int = Field(foreign_key="persons.id", index=True)
    amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    payment_date: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
    bill_id: Optional[int] = Field(default=None, foreign_key="bills.id")
    payment_agreement_id: Optional[int] = Field(
        default=None,
        foreign_key="payment_agreements.id"
    )
    type_payment_id: Optional[int] = Field(default=None, foreign_key="type_payments.id")
