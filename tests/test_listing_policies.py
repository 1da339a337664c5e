"""
Listing after deactivation, for every entity that carries is_active.

Admin-style entities keep showing deactivated rows so they can be
reactivated; catalogue-like entities drop them from get_all. In both
cases the row stays reachable by id.
"""

from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio

from rbac_admin.services import (
    AccessLogService,
    BillService,
    FormService,
    ModuleService,
    ModuloFormService,
    PaymentAgreementService,
    PaymentHistoryService,
    PermissionService,
    PersonService,
    RoleService,
    RoleUserService,
    StateInfractionService,
    TypeInfractionService,
    TypePaymentService,
    UserService,
)
from rbac_admin.services.dtos import (
    AccessLogDto,
    BillDto,
    FormDto,
    ModuleDto,
    ModuloFormDto,
    PaymentAgreementDto,
    PaymentHistoryDto,
    PermissionDto,
    PersonDto,
    RoleDto,
    RoleUserDto,
    StateInfractionDto,
    TypeInfractionDto,
    TypePaymentDto,
    UserDto,
)

PAID_ON = datetime(2024, 3, 5)

# (service, payload built from an existing person id, still listed once inactive)
CASES = [
    pytest.param(
        PersonService,
        lambda person_id: PersonDto(first_name="Luis", last_name="Rojas", document_number="2002"),
        True,
        id="Person",
    ),
    pytest.param(
        UserService,
        lambda person_id: UserDto(username="lrojas", email="l@example.com", password="x", person_id=person_id),
        True,
        id="User",
    ),
    pytest.param(RoleService, lambda person_id: RoleDto(role_name="admin"), True, id="Role"),
    pytest.param(PermissionService, lambda person_id: PermissionDto(name="read"), True, id="Permission"),
    pytest.param(FormService, lambda person_id: FormDto(name="Users"), True, id="Form"),
    pytest.param(ModuleService, lambda person_id: ModuleDto(name="Security"), True, id="Module"),
    pytest.param(
        ModuloFormService, lambda person_id: ModuloFormDto(form_id=1, module_id=1), True, id="ModuloForm"
    ),
    pytest.param(RoleUserService, lambda person_id: RoleUserDto(role_id=1, user_id=1), True, id="RoleUser"),
    pytest.param(
        AccessLogService, lambda person_id: AccessLogDto(user_id=1, action="login"), True, id="AccessLog"
    ),
    pytest.param(
        StateInfractionService,
        lambda person_id: StateInfractionDto(
            infraction_id=1,
            person_id=person_id,
            date_violation=datetime(2024, 3, 1, 8, 30),
            fine_value=Decimal("250000"),
            state="pending",
        ),
        True,
        id="StateInfraction",
    ),
    pytest.param(
        PaymentHistoryService,
        lambda person_id: PaymentHistoryDto(user_id=1, amount=Decimal("120000"), payment_date=PAID_ON),
        True,
        id="PaymentHistory",
    ),
    pytest.param(
        BillService,
        lambda person_id: BillDto(
            barcode="7701234",
            issue_date=PAID_ON,
            expiration_date=datetime(2024, 4, 5),
            total_value=Decimal("250000"),
        ),
        False,
        id="Bill",
    ),
    pytest.param(
        PaymentAgreementService,
        lambda person_id: PaymentAgreementDto(address="Calle 10 # 4-20", finance_amount=Decimal("500000")),
        False,
        id="PaymentAgreement",
    ),
    pytest.param(
        TypeInfractionService,
        lambda person_id: TypeInfractionDto(
            user_id=1, type_violation="Speeding", value_infraction=Decimal("100")
        ),
        False,
        id="TypeInfraction",
    ),
    pytest.param(TypePaymentService, lambda person_id: TypePaymentDto(name="Cash"), False, id="TypePayment"),
]


@pytest_asyncio.fixture
async def person_id(session, person_dto):
    person = await PersonService.from_session(session).create(person_dto)
    return person.id


@pytest.mark.asyncio
@pytest.mark.parametrize("service_class, build_payload, still_listed", CASES)
async def test_listing_after_deactivation(session, person_id, service_class, build_payload, still_listed):
    service = service_class.from_session(session)
    created = await service.create(build_payload(person_id))

    await service.set_active_status(created.id, False)

    listed = [dto.id for dto in await service.get_all()]
    assert (created.id in listed) is still_listed
    assert (await service.get_by_id(created.id)).is_active is False


@pytest.mark.asyncio
@pytest.mark.parametrize("service_class, build_payload, still_listed", CASES)
async def test_reactivated_entity_is_listed(session, person_id, service_class, build_payload, still_listed):
    service = service_class.from_session(session)
    created = await service.create(build_payload(person_id))
    await service.set_active_status(created.id, False)

    await service.set_active_status(created.id, True)

    assert created.id in [dto.id for dto in await service.get_all()]
