import asyncio

import pytest

from council_portal.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from council_portal.services.demographic_service import DemographicService, age_group_key
from tests.factories import create_user


def test_age_group_key() -> None:
    assert age_group_key("30代") == "30s"
    assert age_group_key("70代以上") == "70splus"


def test_save_upserts_one_record_per_user(database) -> None:
    async def scenario():
        async with database.session() as session:
            citizen = await create_user(session, "citizen@example.jp")
            service = DemographicService(session)
            first = await service.save(citizen, "20代", "女性", "三原市民")
            second = await service.save(citizen, "30代", "女性", "三原市民")
            return first.id == second.id, (await service.get_current(citizen)).age_group

    assert asyncio.run(scenario()) == (True, "30代")


def test_invalid_values_and_missing_record(database) -> None:
    async def scenario():
        async with database.session() as session:
            citizen = await create_user(session, "citizen@example.jp")
            service = DemographicService(session)
            with pytest.raises(ValidationError):
                await service.save(citizen, "100代", "女性", "三原市民")
            with pytest.raises(NotFoundError):
                await service.update(citizen, "20代", "男性", "その他市民")

    asyncio.run(scenario())


def test_statistics_are_admin_only_and_keyed(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            first = await create_user(session, "first@example.jp")
            second = await create_user(session, "second@example.jp")
            service = DemographicService(session)
            await service.save(first, "20代", "女性", "三原市民")
            await service.save(second, "70代以上", "回答しない", "その他市民")

            with pytest.raises(PermissionDeniedError):
                await service.get_statistics(first)
            return await service.get_statistics(editor)

    assert asyncio.run(scenario()) == {
        "total": 2,
        "age_group": {"20s": 1, "70splus": 1},
        "gender": {"female": 1, "no_answer": 1},
        "region": {"mihara_citizen": 1, "other_citizen": 1},
    }
