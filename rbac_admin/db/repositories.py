"""
Entity Repositories

One repository per table. Most only bind the generic SQLModelRepository to
their model; the rest add the lookups their service needs:

- PersonRepository.get_by_document_number
- UserRepository.person_exists
- RoleRepository.get_by_name / get_by_user_id
- ModuleRepository.get_by_user_id
- RoleUserRepository.get_by_user_id / get_by_role_id / has_role
- AccessLogRepository.get_by_user_id
- StateInfractionRepository.get_by_person_ids
"""

from typing import Optional, Sequence

from sqlmodel import col, select

from rbac_admin.db.models import (
    AccessLog,
    Bill,
    Form,
    InformationInfraction,
    Module,
    ModuloForm,
    PaymentAgreement,
    PaymentHistory,
    PaymentUser,
    Permission,
    Person,
    Role,
    RoleFormPermission,
    RoleUser,
    StateInfraction,
    TypeInfraction,
    TypePayment,
    User,
    UserNotification,
)
from rbac_admin.db.repository import SQLModelRepository


class PersonRepository(SQLModelRepository[Person]):
    model = Person

    async def get_by_document_number(self, document_number: str) -> list[Person]:
        """All persons registered under a document number (not unique across types)."""
        statement = (
            select(Person)
            .where(Person.document_number == document_number)
            .order_by(Person.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class UserRepository(SQLModelRepository[User]):
    model = User

    async def person_exists(self, person_id: int) -> bool:
        statement = select(Person.id).where(Person.id == person_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None


class RoleRepository(SQLModelRepository[Role]):
    model = Role

    async def get_by_name(self, role_name: str) -> Optional[Role]:
        statement = select(Role).where(Role.role_name == role_name).limit(1)
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def get_by_user_id(self, user_id: int) -> list[Role]:
        """Roles the user holds through an active role assignment."""
        statement = (
            select(Role)
            .join(RoleUser, col(RoleUser.role_id) == col(Role.id))
            .where(RoleUser.user_id == user_id)
            .where(col(RoleUser.is_active).is_(True))
            .distinct()
            .order_by(Role.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class PermissionRepository(SQLModelRepository[Permission]):
    model = Permission


class FormRepository(SQLModelRepository[Form]):
    model = Form


class ModuleRepository(SQLModelRepository[Module]):
    model = Module

    async def get_by_user_id(self, user_id: int) -> list[Module]:
        """
        Modules a user can reach.

        Path: active role assignments of the user -> forms those roles hold
        permissions on -> active module-form links -> modules.
        """
        statement = (
            select(Module)
            .join(ModuloForm, col(ModuloForm.module_id) == col(Module.id))
            .join(
                RoleFormPermission,
                col(RoleFormPermission.form_id) == col(ModuloForm.form_id)
            )
            .join(RoleUser, col(RoleUser.role_id) == col(RoleFormPermission.role_id))
            .where(RoleUser.user_id == user_id)
            .where(col(RoleUser.is_active).is_(True))
            .where(col(ModuloForm.is_active).is_(True))
            .distinct()
            .order_by(Module.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class ModuloFormRepository(SQLModelRepository[ModuloForm]):
    model = ModuloForm


class RoleUserRepository(SQLModelRepository[RoleUser]):
    model = RoleUser

    async def get_by_user_id(self, user_id: int) -> list[RoleUser]:
        statement = select(RoleUser).where(RoleUser.user_id == user_id).order_by(RoleUser.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_role_id(self, role_id: int) -> list[RoleUser]:
        statement = select(RoleUser).where(RoleUser.role_id == role_id).order_by(RoleUser.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def has_role(self, user_id: int, role_id: int) -> bool:
        """True when the user holds the role through an active assignment."""
        statement = (
            select(RoleUser.id)
            .where(RoleUser.user_id == user_id)
            .where(RoleUser.role_id == role_id)
            .where(col(RoleUser.is_active).is_(True))
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None


class RoleFormPermissionRepository(SQLModelRepository[RoleFormPermission]):
    model = RoleFormPermission


class AccessLogRepository(SQLModelRepository[AccessLog]):
    model = AccessLog

    async def get_by_user_id(self, user_id: int) -> list[AccessLog]:
        statement = (
            select(AccessLog)
            .where(AccessLog.user_id == user_id)
            .order_by(col(AccessLog.timestamp).desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class UserNotificationRepository(SQLModelRepository[UserNotification]):
    model = UserNotification


class TypeInfractionRepository(SQLModelRepository[TypeInfraction]):
    model = TypeInfraction


class StateInfractionRepository(SQLModelRepository[StateInfraction]):
    model = StateInfraction

    async def get_by_person_ids(self, person_ids: Sequence[int]) -> list[StateInfraction]:
        if not person_ids:
            return []

        statement = (
            select(StateInfraction)
            .where(col(StateInfraction.person_id).in_(list(person_ids)))
            .order_by(StateInfraction.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class InformationInfractionRepository(SQLModelRepository[InformationInfraction]):
    model = InformationInfraction


class BillRepository(SQLModelRepository[Bill]):
    model = Bill


class PaymentAgreementRepository(SQLModelRepository[PaymentAgreement]):
    model = PaymentAgreement


class PaymentHistoryRepository(SQLModelRepository[PaymentHistory]):
    model = PaymentHistory


class PaymentUserRepository(SQLModelRepository[PaymentUser]):
    model = PaymentUser


class TypePaymentRepository(SQLModelRepository[TypePayment]):
    model = TypePayment
