import asyncio

import pytest

from council_portal.exceptions import AuthenticationRequiredError, PermissionDeniedError
from council_portal.services.permission_service import PermissionService
from tests.factories import create_user


def test_get_role_defaults_to_user(database) -> None:
    async def scenario():
        async with database.session() as session:
            citizen = await create_user(session, "citizen@example.jp")
            gate = PermissionService(session)
            return await gate.get_role(citizen), await gate.get_role(None)

    assert asyncio.run(scenario()) == ("user", "user")


def test_require_admin_accepts_both_elevated_roles(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            operator = await create_user(session, "operator@example.jp", role="superAdmin")
            gate = PermissionService(session)
            return [
                (await gate.require_admin(editor)).role,
                (await gate.require_admin(operator)).role,
            ]

    assert asyncio.run(scenario()) == ["admin", "superAdmin"]


def test_require_admin_rejects_anonymous_and_plain_users(database) -> None:
    async def scenario():
        async with database.session() as session:
            citizen = await create_user(session, "citizen@example.jp")
            gate = PermissionService(session)

            with pytest.raises(AuthenticationRequiredError):
                await gate.require_admin(None)
            with pytest.raises(PermissionDeniedError) as denied:
                await gate.require_admin(citizen)
            return denied.value

    denied = asyncio.run(scenario())
    assert denied.required_role == "admin"
    assert denied.message == "編集者権限以上が必要です"


def test_require_super_admin_rejects_admin(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            gate = PermissionService(session)
            assert await gate.is_admin(editor)
            assert not await gate.is_super_admin(editor)
            await gate.require_super_admin(editor)

    with pytest.raises(PermissionDeniedError, match="運営者権限が必要です"):
        asyncio.run(scenario())
