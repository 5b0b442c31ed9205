import asyncio
import json

from council_portal.cli.migration_cli import run_export, run_import
from council_portal.db.repositories import QuestionRepository
from tests.factories import create_member, create_question, create_user


def _seed(database) -> tuple:
    async def seed():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            citizen = await create_user(session, "citizen@example.jp")
            await create_question(session, "Q1", await create_member(session, "田中"))
            return editor, citizen

    return asyncio.run(seed())


def test_export_writes_snapshot_file(database, tmp_path, capsys) -> None:
    editor, _ = _seed(database)
    output = tmp_path / "out" / "snapshot.json"

    exit_code = asyncio.run(run_export(editor, str(output), database.url))

    assert exit_code == 0
    snapshot = json.loads(output.read_text(encoding="utf-8"))
    assert snapshot["data"]["questions"][0]["councilMemberName"] == "田中"
    assert "questions=1" in capsys.readouterr().out


def test_import_reports_stats_and_refuses_plain_users(database, tmp_path, capsys) -> None:
    editor, citizen = _seed(database)
    snapshot = tmp_path / "snapshot.json"
    asyncio.run(run_export(editor, str(snapshot), database.url))
    capsys.readouterr()

    refused = asyncio.run(run_import(citizen, str(snapshot), database.url, False, True))
    refused_out = capsys.readouterr().out
    imported = asyncio.run(run_import(editor, str(snapshot), database.url, True, True))
    imported_out = capsys.readouterr().out

    async def count_questions():
        async with database.session() as session:
            return await QuestionRepository(session).count()

    assert refused == 2
    assert "Import refused" in refused_out
    assert imported == 0
    assert "questions: 1 imported, 0 skipped" in imported_out
    assert asyncio.run(count_questions()) == 1
