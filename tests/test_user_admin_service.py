import asyncio

import pytest

from council_portal.db.repositories import AdminUserRepository, LikeRepository, UserRepository
from council_portal.exceptions import PermissionDeniedError, ValidationError
from council_portal.services.permission_service import PermissionService
from council_portal.services.user_admin_service import UserAdminService
from tests.factories import create_member, create_question, create_user


def test_change_user_role_grants_patches_and_revokes(database) -> None:
    async def scenario():
        async with database.session() as session:
            operator = await create_user(session, "operator@example.jp", role="superAdmin")
            target = await create_user(session, "target@example.jp")
            service = UserAdminService(session)
            gate = PermissionService(session)

            roles = []
            for role in ("admin", "superAdmin", "user"):
                await service.change_user_role(operator, target, role)
                roles.append(await gate.get_role(target))
            return roles

    assert asyncio.run(scenario()) == ["admin", "superAdmin", "user"]


def test_operator_cannot_demote_themself(database) -> None:
    async def scenario():
        async with database.session() as session:
            operator = await create_user(session, "operator@example.jp", role="superAdmin")
            service = UserAdminService(session)

            with pytest.raises(PermissionDeniedError):
                await service.change_user_role(operator, operator, "admin")
            with pytest.raises(ValidationError):
                await service.change_user_role(operator, operator, "owner")
            return await PermissionService(session).get_role(operator)

    assert asyncio.run(scenario()) == "superAdmin"


def test_operator_cannot_delete_themself(database) -> None:
    async def scenario():
        async with database.session() as session:
            operator = await create_user(session, "operator@example.jp", role="superAdmin")
            with pytest.raises(PermissionDeniedError):
                await UserAdminService(session).delete_user(operator, operator)
            return await UserRepository(session).get_by_id(operator)

    assert asyncio.run(scenario()) is not None


def test_delete_user_removes_role_and_likes(database) -> None:
    async def scenario():
        async with database.session() as session:
            operator = await create_user(session, "operator@example.jp", role="superAdmin")
            target = await create_user(session, "editor@example.jp", role="admin")
            question_id = await create_question(session, "Q1", await create_member(session, "田中"))
            await LikeRepository(session).insert(user_id=target, question_id=question_id)

            await UserAdminService(session).delete_user(operator, target)
            return (
                await UserRepository(session).get_by_id(target),
                await AdminUserRepository(session).get_by_user_id(target),
                await LikeRepository(session).count(user_id=target),
            )

    assert asyncio.run(scenario()) == (None, None, 0)


def test_list_users_requires_super_admin(database) -> None:
    async def scenario():
        async with database.session() as session:
            operator = await create_user(session, "operator@example.jp", role="superAdmin", name="運営")
            editor = await create_user(session, "editor@example.jp", role="admin")
            await create_user(session, "citizen@example.jp")
            service = UserAdminService(session)

            with pytest.raises(PermissionDeniedError):
                await service.list_users(editor)
            return await service.list_users(operator)

    users = asyncio.run(scenario())
    assert sorted(user["role"] for user in users) == ["admin", "superAdmin", "user"]


def test_first_user_bootstrap_happens_once(database) -> None:
    async def scenario():
        async with database.session() as session:
            first = await create_user(session, "first@example.jp")
            second = await create_user(session, "second@example.jp")
            service = UserAdminService(session)
            return (
                await service.make_first_user_super_admin(first),
                await service.make_first_user_super_admin(second),
                await PermissionService(session).get_role(first),
                await PermissionService(session).get_role(second),
            )

    assert asyncio.run(scenario()) == (True, False, "superAdmin", "user")
