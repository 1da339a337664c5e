"""
Tests for the infraction and payment services.

Catalogue-like entities (bills, agreements, infraction and payment types)
only list active rows; everything stays reachable by id.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from rbac_admin.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ExternalServiceError,
    ValidationError,
)
from rbac_admin.services import (
    BillService,
    InformationInfractionService,
    PaymentAgreementService,
    PaymentHistoryService,
    PaymentUserService,
    PersonService,
    StateInfractionService,
    TypeInfractionService,
    TypePaymentService,
)
from rbac_admin.services.dtos import (
    BillDto,
    InformationInfractionDto,
    PaymentAgreementDto,
    PaymentHistoryDto,
    PaymentUserDto,
    PersonDto,
    StateInfractionDto,
    TypeInfractionDto,
    TypePaymentDto,
)

# Naive datetimes: SQLite drops the timezone on the way back.
VIOLATION_DATE = datetime(2024, 3, 1, 8, 30)
ISSUE_DATE = datetime(2024, 3, 5)
EXPIRATION_DATE = datetime(2024, 4, 5)
FINE = Decimal("250000.00")


@pytest.fixture
def persons(session):
    return PersonService.from_session(session)


@pytest.fixture
def infractions(session):
    return StateInfractionService.from_session(session)


def infraction_for(person_id: int) -> StateInfractionDto:
    return StateInfractionDto(
        infraction_id=1,
        person_id=person_id,
        date_violation=VIOLATION_DATE,
        fine_value=FINE,
        state="pending",
    )


class TestStateInfractionService:

    @pytest.mark.asyncio
    async def test_create_for_active_person(self, persons, infractions, person_dto):
        person = await persons.create(person_dto)

        created = await infractions.create(infraction_for(person.id))

        assert created.id > 0
        assert created.fine_value == FINE
        assert created.document_number is None

    @pytest.mark.asyncio
    async def test_unknown_person_is_rejected(self, infractions):
        with pytest.raises(ValidationError) as exc_info:
            await infractions.create(infraction_for(77))

        assert exc_info.value.field == "person_id"

    @pytest.mark.asyncio
    async def test_inactive_person_breaks_business_rule(self, persons, infractions, person_dto):
        person = await persons.create(person_dto)
        await persons.set_active_status(person.id, False)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            await infractions.create(infraction_for(person.id))

        assert exc_info.value.code == "PersonInactive"

    @pytest.mark.asyncio
    async def test_update_after_person_deactivated_breaks_business_rule(
        self, persons, infractions, person_dto
    ):
        person = await persons.create(person_dto)
        created = await infractions.create(infraction_for(person.id))
        await persons.set_active_status(person.id, False)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            await infractions.update(created.model_copy(update={"state": "paid"}))

        assert exc_info.value.code == "PersonInactive"
        assert (await infractions.get_by_id(created.id)).state == "pending"

    @pytest.mark.asyncio
    async def test_update_for_active_person(self, persons, infractions, person_dto):
        person = await persons.create(person_dto)
        created = await infractions.create(infraction_for(person.id))

        updated = await infractions.update(created.model_copy(update={"state": "paid"}))

        assert updated.state == "paid"

    @pytest.mark.asyncio
    async def test_missing_violation_date_is_rejected(self, infractions):
        with pytest.raises(ValidationError) as exc_info:
            await infractions.create(infraction_for(1).model_copy(update={"date_violation": None}))

        assert exc_info.value.field == "date_violation"

    @pytest.mark.asyncio
    async def test_lookup_by_document_number_fills_document(self, persons, infractions, person_dto):
        owner = await persons.create(person_dto)
        other = await persons.create(person_dto.model_copy(update={"document_number": "2002"}))
        first = await infractions.create(infraction_for(owner.id))
        second = await infractions.create(infraction_for(owner.id).model_copy(update={"state": "paid"}))
        await infractions.create(infraction_for(other.id))

        found = await infractions.get_by_document_number("1001")

        assert [i.id for i in found] == [first.id, second.id]
        assert {i.document_number for i in found} == {"1001"}

    @pytest.mark.asyncio
    async def test_lookup_by_unknown_document_number(self, infractions):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await infractions.get_by_document_number("0000")

        assert exc_info.value.entity_name == "Person"

    @pytest.mark.asyncio
    async def test_lookup_by_blank_document_number(self, infractions):
        with pytest.raises(ValidationError):
            await infractions.get_by_document_number("")


class TestActiveOnlyListing:
    """After deactivation these entities drop out of get_all."""

    @pytest.mark.asyncio
    async def test_bill(self, session):
        bills = BillService.from_session(session)
        bill = await bills.create(BillDto(
            barcode="7701234", issue_date=ISSUE_DATE, expiration_date=EXPIRATION_DATE, total_value=FINE
        ))

        await bills.set_active_status(bill.id, False)

        assert await bills.get_all() == []
        assert (await bills.get_by_id(bill.id)).is_active is False

    @pytest.mark.asyncio
    async def test_type_infraction(self, session):
        types = TypeInfractionService.from_session(session)
        kept = await types.create(TypeInfractionDto(
            user_id=1, type_violation="Speeding", value_infraction=Decimal("100")
        ))
        dropped = await types.create(TypeInfractionDto(
            user_id=1, type_violation="Parking", value_infraction=Decimal("50")
        ))

        await types.set_active_status(dropped.id, False)

        assert [t.id for t in await types.get_all()] == [kept.id]

    @pytest.mark.asyncio
    async def test_type_payment(self, session):
        types = TypePaymentService.from_session(session)
        created = await types.create(TypePaymentDto(name="Cash"))

        await types.set_active_status(created.id, False)
        assert await types.get_all() == []

        await types.set_active_status(created.id, True)
        assert [t.name for t in await types.get_all()] == ["Cash"]

    @pytest.mark.asyncio
    async def test_payment_agreement(self, session):
        agreements = PaymentAgreementService.from_session(session)
        created = await agreements.create(PaymentAgreementDto(
            address="Calle 10 # 4-20", finance_amount=Decimal("500000")
        ))

        await agreements.set_active_status(created.id, False)

        assert await agreements.get_all() == []


class TestBillService:

    @pytest.mark.asyncio
    async def test_required_fields(self, session):
        bills = BillService.from_session(session)

        with pytest.raises(ValidationError) as exc_info:
            await bills.create(BillDto(barcode="7701234", issue_date=ISSUE_DATE, total_value=FINE))

        assert exc_info.value.field == "expiration_date"

    @pytest.mark.asyncio
    async def test_update_details(self, session):
        bills = BillService.from_session(session)
        created = await bills.create(BillDto(
            barcode="7701234", issue_date=ISSUE_DATE, expiration_date=EXPIRATION_DATE, total_value=FINE
        ))

        updated = await bills.update_details(
            created.id, "7709999", ISSUE_DATE, EXPIRATION_DATE, Decimal("300000.00"), "paid"
        )

        assert updated.barcode == "7709999"
        assert updated.total_value == Decimal("300000.00")
        assert updated.state == "paid"

    @pytest.mark.asyncio
    async def test_update_details_rejects_non_positive_total(self, session):
        bills = BillService.from_session(session)
        created = await bills.create(BillDto(
            barcode="7701234", issue_date=ISSUE_DATE, expiration_date=EXPIRATION_DATE, total_value=FINE
        ))

        with pytest.raises(ValidationError) as exc_info:
            await bills.update_details(created.id, "7701234", ISSUE_DATE, EXPIRATION_DATE, Decimal("0"), None)

        assert exc_info.value.field == "total_value"

    @pytest.mark.asyncio
    async def test_update_details_rejects_non_numeric_total(self, session):
        bills = BillService.from_session(session)
        created = await bills.create(BillDto(
            barcode="7701234", issue_date=ISSUE_DATE, expiration_date=EXPIRATION_DATE, total_value=FINE
        ))

        with pytest.raises(ValidationError) as exc_info:
            await bills.update_details(created.id, "7701234", ISSUE_DATE, EXPIRATION_DATE, "x", None)

        assert exc_info.value.field == "total_value"
        assert (await bills.get_by_id(created.id)).total_value == FINE


class TestPaymentServices:

    @pytest.mark.asyncio
    async def test_agreement_partial_update(self, session):
        agreements = PaymentAgreementService.from_session(session)
        created = await agreements.create(PaymentAgreementDto(
            address="Calle 10 # 4-20", neighborhood="Centro", finance_amount=Decimal("500000")
        ))

        updated = await agreements.update_partial(created.id, finance_amount=Decimal("450000"))

        assert updated.finance_amount == Decimal("450000")
        assert updated.address == "Calle 10 # 4-20"
        assert updated.neighborhood == "Centro"

    @pytest.mark.asyncio
    async def test_type_payment_update_details(self, session):
        types = TypePaymentService.from_session(session)
        created = await types.create(TypePaymentDto(name="Cash"))

        updated = await types.update_details(created.id, "Card", "Debit or credit")

        assert (updated.name, updated.description) == ("Card", "Debit or credit")

    @pytest.mark.asyncio
    async def test_payment_history_requires_amount(self, session):
        history = PaymentHistoryService.from_session(session)

        with pytest.raises(ValidationError) as exc_info:
            await history.create(PaymentHistoryDto(user_id=1, payment_date=ISSUE_DATE))

        assert exc_info.value.field == "amount"

    @pytest.mark.asyncio
    async def test_payment_user_is_hard_deleted(self, session):
        payments = PaymentUserService.from_session(session)
        created = await payments.create(PaymentUserDto(
            person_id=1, amount=Decimal("120000"), payment_date=ISSUE_DATE
        ))

        await payments.delete(created.id)

        assert await payments.get_all() == []

    @pytest.mark.asyncio
    async def test_information_infraction_values_must_be_positive(self, session):
        information = InformationInfractionService.from_session(session)

        with pytest.raises(ValidationError) as exc_info:
            await information.create(InformationInfractionDto(
                number_smldv=15,
                minimum_wage=Decimal("1300000"),
                value_smldv=Decimal("43333.33"),
            ))

        assert exc_info.value.field == "total_value"


class TestFailedWrites:
    """A write rejected by the store leaves the session usable."""

    @pytest.mark.asyncio
    async def test_session_recovers_after_constraint_violation(self, fk_session):
        persons = PersonService.from_session(fk_session)
        payments = PaymentUserService.from_session(fk_session)
        orphan = PaymentUserDto(person_id=999, amount=Decimal("120000"), payment_date=ISSUE_DATE)

        with pytest.raises(ExternalServiceError):
            await payments.create(orphan)

        assert await payments.get_all() == []

        person = await persons.create(PersonDto(first_name="Ana", last_name="Gomez", document_number="1001"))
        created = await payments.create(orphan.model_copy(update={"person_id": person.id}))
        assert [p.id for p in await payments.get_all()] == [created.id]
