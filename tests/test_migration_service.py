import asyncio
import json
from datetime import datetime

import pytest

from council_portal.db.repositories import (
    CouncilMemberRepository,
    FAQItemRepository,
    LikeRepository,
    NewsRepository,
    QuestionRepository,
    ResponseRepository,
    SlideshowSlideRepository,
)
from council_portal.exceptions import AuthenticationRequiredError, PermissionDeniedError
from council_portal.services.migration_service import (
    INVALID_FORMAT_MESSAGE,
    DataMigrationService,
    ImportOptions,
    TableStats,
    summarize_stats,
)
from council_portal.utils.time_utils import to_epoch_ms
from tests.factories import create_member, create_question, create_user

SESSION_DATE = to_epoch_ms(datetime(2024, 3, 1))


def _snapshot(**tables) -> str:
    return json.dumps({"exportedAt": SESSION_DATE, "data": tables}, ensure_ascii=False)


def _question(title: str, member_id: str = "old-member", member_name: str = "田中", **extra) -> dict:
    return {
        "_id": extra.pop("_id", f"old-{title}"),
        "title": title,
        "content": f"{title}の内容",
        "category": "教育",
        "councilMemberId": member_id,
        "councilMemberName": member_name,
        "sessionDate": SESSION_DATE,
        **extra,
    }


def _response(question_title: str, question_id: str = "stale-question") -> dict:
    return {
        "questionId": question_id,
        "questionTitle": question_title,
        "content": "検討します",
        "respondentTitle": "教育長",
    }


TANAKA_SNAPSHOT = _snapshot(
    councilMembers=[{"_id": "old-member", "name": "田中", "party": "無所属"}],
    questions=[_question("Q1")],
    responses=[_response("Q1", question_id="old-Q1")],
)


async def _admin(session, role: str = "admin") -> str:
    return await create_user(session, f"{role}@example.jp", role=role)


def test_import_into_empty_database_relinks_references(database) -> None:
    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            result = await DataMigrationService(session).import_all_data(
                admin_id, TANAKA_SNAPSHOT, ImportOptions(skip_duplicates=False)
            )
            member = await CouncilMemberRepository(session).find_by_name("田中")
            question = await QuestionRepository(session).find_by_title("Q1")
            responses = await ResponseRepository(session).list_all()
            return result, member, question, responses

    result, member, question, responses = asyncio.run(scenario())

    assert result.success
    assert result.stats["councilMembers"] == TableStats(imported=1, skipped=0)
    assert result.stats["questions"] == TableStats(imported=1, skipped=0)
    assert result.stats["responses"] == TableStats(imported=1, skipped=0)
    assert member.id != "old-member"
    assert question.council_member_id == member.id
    assert [response.question_id for response in responses] == [question.id]


def test_reimport_skips_members_and_questions_but_duplicates_responses(database) -> None:
    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            service = DataMigrationService(session)
            await service.import_all_data(admin_id, TANAKA_SNAPSHOT, ImportOptions(skip_duplicates=False))
            second = await service.import_all_data(admin_id, TANAKA_SNAPSHOT, ImportOptions(skip_duplicates=True))
            return (
                second,
                await CouncilMemberRepository(session).count(),
                await QuestionRepository(session).count(),
                await ResponseRepository(session).list_all(),
                await QuestionRepository(session).find_by_title("Q1"),
            )

    second, members, questions, responses, question = asyncio.run(scenario())

    assert second.stats["councilMembers"] == TableStats(imported=0, skipped=1)
    assert second.stats["questions"] == TableStats(imported=0, skipped=1)
    assert second.stats["responses"] == TableStats(imported=1, skipped=0)
    assert (members, questions, len(responses)) == (1, 1, 2)
    assert {response.question_id for response in responses} == {question.id}


def test_unresolvable_member_skips_question_and_continues(database) -> None:
    snapshot = _snapshot(
        councilMembers=[{"_id": "old-member", "name": "田中"}],
        questions=[
            _question("孤立した質問", member_id="missing", member_name="存在しない議員"),
            _question("Q1"),
        ],
        responses=[_response("孤立した質問"), _response("Q1")],
    )

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            result = await DataMigrationService(session).import_all_data(admin_id, snapshot)
            titles = [question.title for question in await QuestionRepository(session).list_all()]
            return result, titles

    result, titles = asyncio.run(scenario())

    assert result.success
    assert result.stats["questions"] == TableStats(imported=1, skipped=1)
    assert result.stats["responses"] == TableStats(imported=1, skipped=1)
    assert titles == ["Q1"]


def test_question_falls_back_to_member_name_in_target_database(database) -> None:
    snapshot = _snapshot(questions=[_question("Q2", member_id="id-from-elsewhere")])

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            member_id = await create_member(session, "田中")
            result = await DataMigrationService(session).import_all_data(admin_id, snapshot)
            question = await QuestionRepository(session).find_by_title("Q2")
            return result, member_id, question

    result, member_id, question = asyncio.run(scenario())

    assert result.stats["questions"].imported == 1
    assert question.council_member_id == member_id


def test_invalid_record_is_counted_as_skipped(database) -> None:
    snapshot = _snapshot(
        councilMembers=[{"_id": "old-member", "name": "田中"}, {"party": "名前なし"}],
        questions=[_question("Q1", sessionDate="not-a-date")],
    )

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            return await DataMigrationService(session).import_all_data(admin_id, snapshot)

    result = asyncio.run(scenario())

    assert result.success
    assert result.stats["councilMembers"] == TableStats(imported=1, skipped=1)
    assert result.stats["questions"] == TableStats(imported=0, skipped=1)


def test_export_then_reimport_is_idempotent_for_natural_keys(database) -> None:
    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            member_id = await create_member(session, "佐藤", party="市民党")
            question_id = await create_question(session, "公園の整備について", member_id)
            await ResponseRepository(session).insert(
                question_id=question_id, content="整備します", respondent_title="市長"
            )
            await NewsRepository(session).insert(
                title="議会だより", content="本文", category="お知らせ", author_id=admin_id
            )
            await FAQItemRepository(session).insert(
                category="全般", question="傍聴できますか", answer="はい", created_by=admin_id
            )
            await LikeRepository(session).insert(user_id=admin_id, question_id=question_id)
            await session.commit()

            service = DataMigrationService(session)
            exported = await service.export_all_data(admin_id)
            result = await service.import_all_data(admin_id, json.dumps(exported, ensure_ascii=False))
            likes = await LikeRepository(session).list_all()
            return exported, result, likes, question_id

    exported, result, likes, question_id = asyncio.run(scenario())

    assert isinstance(exported["exportedAt"], int)
    data = exported["data"]
    assert data["questions"][0]["councilMemberName"] == "佐藤"
    assert isinstance(data["questions"][0]["sessionDate"], int)
    assert data["responses"][0]["questionTitle"] == "公園の整備について"
    for table in ("councilMembers", "questions", "news", "faqItems"):
        assert result.stats[table] == TableStats(imported=0, skipped=1)
    assert {like.question_id for like in likes} == {question_id}


def test_clear_then_import_leaves_only_snapshot_rows(database) -> None:
    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            leftover = await create_member(session, "鈴木")
            await create_question(session, "古い質問", leftover)
            await session.commit()

            result = await DataMigrationService(session).import_all_data(
                admin_id, TANAKA_SNAPSHOT, ImportOptions(clear_existing_data=True)
            )
            members = [member.name for member in await CouncilMemberRepository(session).list_all()]
            questions = [question.title for question in await QuestionRepository(session).list_all()]
            return result, members, questions

    result, members, questions = asyncio.run(scenario())

    assert result.success
    assert members == ["田中"]
    assert questions == ["Q1"]


def test_news_and_likes_are_restamped_and_verified(database) -> None:
    snapshot = _snapshot(
        councilMembers=[{"_id": "old-member", "name": "田中"}],
        questions=[_question("Q1")],
        news=[{"title": "お知らせ", "content": "本文", "category": "一般", "authorId": "someone-else"}],
        likes=[
            {"userId": "citizen", "questionId": "old-Q1"},
            {"userId": "citizen", "questionId": "deleted-question"},
        ],
    )

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            result = await DataMigrationService(session).import_all_data(admin_id, snapshot)
            news = await NewsRepository(session).find_by_title("お知らせ")
            likes = await LikeRepository(session).list_all()
            question = await QuestionRepository(session).find_by_title("Q1")
            return admin_id, result, news, likes, question

    admin_id, result, news, likes, question = asyncio.run(scenario())

    assert news.author_id == admin_id
    assert result.stats["likes"] == TableStats(imported=1, skipped=1)
    assert [like.question_id for like in likes] == [question.id]


def test_malformed_payloads_return_failure_without_stats(database) -> None:
    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            service = DataMigrationService(session)
            return (
                await service.import_all_data(admin_id, "{not json"),
                await service.import_all_data(admin_id, json.dumps({"exportedAt": 1})),
            )

    broken, missing = asyncio.run(scenario())

    assert not broken.success
    assert broken.stats is None
    assert broken.message.startswith("インポートエラー: JSONの解析に失敗しました")
    assert missing.to_dict() == {
        "success": False,
        "message": f"インポートエラー: {INVALID_FORMAT_MESSAGE}",
        "stats": None,
    }


def test_migration_requires_elevated_roles(database) -> None:
    async def scenario():
        async with database.session() as session:
            citizen = await create_user(session, "citizen@example.jp")
            editor = await _admin(session)
            service = DataMigrationService(session)

            with pytest.raises(AuthenticationRequiredError):
                await service.import_all_data(None, TANAKA_SNAPSHOT)
            with pytest.raises(PermissionDeniedError):
                await service.export_all_data(citizen)
            with pytest.raises(PermissionDeniedError):
                await service.clear_all_data(editor)
            return await CouncilMemberRepository(session).count()

    assert asyncio.run(scenario()) == 0


def test_clear_all_data_reports_deleted_rows(database) -> None:
    async def scenario():
        async with database.session() as session:
            operator = await _admin(session, role="superAdmin")
            member_id = await create_member(session, "田中")
            await create_question(session, "Q1", member_id)
            await session.commit()

            report = await DataMigrationService(session).clear_all_data(operator)
            again = await DataMigrationService(session).clear_all_data(operator)
            return report, again

    report, again = asyncio.run(scenario())

    assert report.ok
    assert report.deleted["councilMembers"] == 1
    assert report.deleted["questions"] == 1
    assert sum(again.deleted.values()) == 0


def test_clear_keeps_going_when_one_table_fails(database, monkeypatch) -> None:
    async def failing_delete_all(self):
        raise RuntimeError("table locked")

    async def scenario():
        async with database.session() as session:
            operator = await _admin(session, role="superAdmin")
            member_id = await create_member(session, "田中")
            await create_question(session, "Q1", member_id)
            await NewsRepository(session).insert(
                title="議会だより", content="本文", category="お知らせ", author_id=operator
            )
            await session.commit()

            monkeypatch.setattr(QuestionRepository, "delete_all", failing_delete_all)
            report = await DataMigrationService(session).clear_all_data(operator)
            return (
                report,
                await CouncilMemberRepository(session).count(),
                await QuestionRepository(session).count(),
                await NewsRepository(session).count(),
            )

    report, members, questions, news = asyncio.run(scenario())

    assert not report.ok
    assert report.failed == ["questions"]
    assert "questions" not in report.deleted
    assert (members, questions, news) == (0, 1, 0)


def test_import_names_tables_that_failed_to_clear(database, monkeypatch) -> None:
    async def failing_delete_all(self):
        raise RuntimeError("table locked")

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            await create_question(session, "古い質問", await create_member(session, "鈴木"))
            await session.commit()

            monkeypatch.setattr(QuestionRepository, "delete_all", failing_delete_all)
            result = await DataMigrationService(session).import_all_data(
                admin_id, TANAKA_SNAPSHOT, ImportOptions(clear_existing_data=True)
            )
            titles = [question.title for question in await QuestionRepository(session).list_all()]
            return result, titles

    result, titles = asyncio.run(scenario())

    assert result.success
    assert "questions" in result.message
    assert titles == ["古い質問", "Q1"]


def test_database_error_skips_only_the_failing_record(database) -> None:
    snapshot = _snapshot(
        councilMembers=[
            {"_id": "a", "name": "A"},
            {"_id": "b", "name": "B", "electionCount": 10**30},
            {"_id": "c", "name": "C"},
        ],
    )

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            result = await DataMigrationService(session).import_all_data(admin_id, snapshot)
            names = [member.name for member in await CouncilMemberRepository(session).list_all()]
            return result, names

    result, names = asyncio.run(scenario())

    assert result.success
    assert result.stats["councilMembers"] == TableStats(imported=2, skipped=1)
    assert names == ["A", "C"]


def test_faq_and_slides_are_restamped_to_importer(database) -> None:
    snapshot = _snapshot(
        faqItems=[
            {
                "category": "全般",
                "question": "傍聴できますか",
                "answer": "はい",
                "createdAt": SESSION_DATE,
                "createdBy": "someone-else",
            },
            {"category": "全般", "question": "録画はありますか", "answer": "あります"},
        ],
        slideshowSlides=[{"title": "ようこそ", "createdBy": "someone-else"}],
    )

    async def scenario():
        async with database.session() as session:
            admin_id = await _admin(session)
            result = await DataMigrationService(session).import_all_data(admin_id, snapshot)
            faq = FAQItemRepository(session)
            return (
                admin_id,
                result,
                await faq.find_by_question("傍聴できますか"),
                await faq.find_by_question("録画はありますか"),
                await SlideshowSlideRepository(session).list_all(),
            )

    admin_id, result, kept, stamped, slides = asyncio.run(scenario())

    assert result.stats["faqItems"] == TableStats(imported=2, skipped=0)
    assert result.stats["slideshowSlides"] == TableStats(imported=1, skipped=0)
    assert kept.created_by == admin_id
    assert kept.created_at == datetime(2024, 3, 1)
    assert stamped.created_by == admin_id
    assert stamped.created_at is not None
    assert [slide.created_by for slide in slides] == [admin_id]


def test_summarize_stats_lists_active_tables() -> None:
    stats = {
        "councilMembers": TableStats(imported=2, skipped=1),
        "news": TableStats(),
    }

    assert list(summarize_stats(stats)) == ["councilMembers: 2 imported, 1 skipped"]
