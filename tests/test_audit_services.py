"""Tests for access logs and user notifications."""

import pytest

from rbac_admin.core.exceptions import EntityNotFoundError, ValidationError
from rbac_admin.services import AccessLogService, UserNotificationService
from rbac_admin.services.dtos import AccessLogDto, UserNotificationDto


@pytest.fixture
def access_logs(session):
    return AccessLogService.from_session(session)


@pytest.fixture
def notifications(session):
    return UserNotificationService.from_session(session)


class TestAccessLogService:

    @pytest.mark.asyncio
    async def test_create_for_user_stamps_timestamp(self, access_logs):
        created = await access_logs.create_for_user(
            AccessLogDto(action="login", status=True), user_id=3, details="from 10.0.0.1"
        )

        assert created.user_id == 3
        assert created.details == "from 10.0.0.1"
        assert created.timestamp is not None

    @pytest.mark.asyncio
    async def test_create_for_user_rejects_invalid_user(self, access_logs):
        with pytest.raises(ValidationError) as exc_info:
            await access_logs.create_for_user(AccessLogDto(action="login"), user_id=0)

        assert exc_info.value.field == "user_id"

    @pytest.mark.asyncio
    async def test_create_requires_action(self, access_logs):
        with pytest.raises(ValidationError) as exc_info:
            await access_logs.create(AccessLogDto(user_id=3))

        assert exc_info.value.field == "action"

    @pytest.mark.asyncio
    async def test_update_details(self, access_logs):
        created = await access_logs.create_for_user(AccessLogDto(action="login"), user_id=3)

        updated = await access_logs.update_details(created.id, "login failed", False, "bad password")

        assert (updated.action, updated.status, updated.details) == ("login failed", False, "bad password")
        assert updated.user_id == 3
        assert updated.timestamp == created.timestamp

    @pytest.mark.asyncio
    async def test_update_details_requires_action(self, access_logs):
        created = await access_logs.create_for_user(AccessLogDto(action="login"), user_id=3)

        with pytest.raises(ValidationError) as exc_info:
            await access_logs.update_details(created.id, "", True, None)

        assert exc_info.value.field == "action"

    @pytest.mark.asyncio
    async def test_entries_of_user_newest_first(self, access_logs):
        for action in ("login", "view users", "logout"):
            await access_logs.create_for_user(AccessLogDto(action=action), user_id=3)
        await access_logs.create_for_user(AccessLogDto(action="login"), user_id=4)

        entries = await access_logs.get_by_user_id(3)

        assert len(entries) == 3
        timestamps = [entry.timestamp for entry in entries]
        assert timestamps == sorted(timestamps, reverse=True)


class TestUserNotificationService:

    @pytest.mark.asyncio
    async def test_new_notification_is_unread_and_visible(self, notifications):
        created = await notifications.create(
            UserNotificationDto(user_id=1, message="Welcome", is_read=True, is_hidden=True)
        )

        assert created.is_read is False
        assert created.is_hidden is False

    @pytest.mark.asyncio
    async def test_hidden_notification_is_not_listed_but_reachable(self, notifications):
        kept = await notifications.create(UserNotificationDto(user_id=1, message="Welcome"))
        hidden = await notifications.create(UserNotificationDto(user_id=1, message="Old news"))

        await notifications.update_visibility(hidden.id, True)

        assert [n.id for n in await notifications.get_all()] == [kept.id]
        assert (await notifications.get_by_id(hidden.id)).is_hidden is True

    @pytest.mark.asyncio
    async def test_update_copies_only_message_and_read_flag(self, notifications):
        created = await notifications.create(UserNotificationDto(user_id=1, message="Welcome"))

        updated = await notifications.update(
            created.model_copy(update={"message": "Hello", "is_read": True, "is_hidden": True, "user_id": 9})
        )

        assert updated.message == "Hello"
        assert updated.is_read is True
        assert updated.is_hidden is False
        assert updated.user_id == 1

    @pytest.mark.asyncio
    async def test_visibility_of_missing_notification(self, notifications):
        with pytest.raises(EntityNotFoundError):
            await notifications.update_visibility(404, True)
