"""
Data migration: snapshot export, bulk erase and snapshot import.

A snapshot is the JSON export of every mutable table. Questions carry the
name of their council member and responses the title of their question so
a snapshot can be re-linked in a database where the original ids mean
nothing.

Import runs the tables in a fixed order because later tables are re-linked
through id maps filled by earlier ones:

    councilMembers -> questions -> responses -> news -> slideshowSlides
    -> faqItems -> contactMessages -> userDemographics -> likes

Each record is imported inside its own savepoint; a failing record is
logged and counted as skipped, and the run continues. Each table pass is
committed on completion, so an interrupted run keeps the tables it finished.
Re-running with ``skip_duplicates`` is the recovery path.

Responsibility: Export/import of the full dataset with referential integrity
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import Base
from ..db.repositories import (
    ContactMessageRepository,
    CouncilMemberRepository,
    DocumentRepository,
    FAQItemRepository,
    LikeRepository,
    NewsRepository,
    QuestionRepository,
    ResponseRepository,
    SlideshowSlideRepository,
    UserDemographicRepository,
)
from ..exceptions import SnapshotFormatError
from ..models.snapshot import (
    ContactMessageRecord,
    CouncilMemberRecord,
    FAQItemRecord,
    LikeRecord,
    NewsRecord,
    QuestionRecord,
    ResponseRecord,
    SlideshowSlideRecord,
    SnapshotRecord,
    UserDemographicRecord,
)
from ..utils.time_utils import now_ms, utcnow
from .permission_service import PermissionService
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

# Snapshot key -> (repository, record model); also the export/stats key order
SNAPSHOT_TABLES: Dict[str, tuple[Type[DocumentRepository], Type[SnapshotRecord]]] = {
    "councilMembers": (CouncilMemberRepository, CouncilMemberRecord),
    "questions": (QuestionRepository, QuestionRecord),
    "responses": (ResponseRepository, ResponseRecord),
    "news": (NewsRepository, NewsRecord),
    "slideshowSlides": (SlideshowSlideRepository, SlideshowSlideRecord),
    "faqItems": (FAQItemRepository, FAQItemRecord),
    "contactMessages": (ContactMessageRepository, ContactMessageRecord),
    "likes": (LikeRepository, LikeRecord),
    "userDemographics": (UserDemographicRepository, UserDemographicRecord),
}

# Children before parents
ERASE_ORDER = [
    "responses",
    "questions",
    "councilMembers",
    "news",
    "slideshowSlides",
    "faqItems",
    "contactMessages",
    "userDemographics",
    "likes",
]

IMPORT_ORDER = [
    "councilMembers",
    "questions",
    "responses",
    "news",
    "slideshowSlides",
    "faqItems",
    "contactMessages",
    "userDemographics",
    "likes",
]

INVALID_FORMAT_MESSAGE = "無効なデータ形式です。エクスポートされたJSONファイルを使用してください。"


@dataclass
class TableStats:
    """Per-table import counters."""

    imported: int = 0
    skipped: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"imported": self.imported, "skipped": self.skipped}


@dataclass
class ImportOptions:
    clear_existing_data: bool = False
    skip_duplicates: bool = True


@dataclass
class ImportResult:
    """Outcome of an import request; ``stats`` is None when nothing ran."""

    success: bool
    message: str
    stats: Optional[Dict[str, TableStats]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "stats": (
                {table: counts.to_dict() for table, counts in self.stats.items()}
                if self.stats is not None else None
            ),
        }


@dataclass
class EraseReport:
    deleted: Dict[str, int] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def parse_snapshot(json_data: str) -> Dict[str, Any]:
    """
    Parse an exported snapshot and return its ``data`` object.

    Raises:
        SnapshotFormatError: not JSON, or no ``data`` object
    """
    try:
        payload = json.loads(json_data)
    except (TypeError, ValueError) as e:
        raise SnapshotFormatError(f"JSONの解析に失敗しました: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        raise SnapshotFormatError(INVALID_FORMAT_MESSAGE)

    return payload["data"]


def _column_values(row: Base) -> Dict[str, Any]:
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


class SnapshotReader:
    """Reads every mutable table into a self-describing snapshot."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def read(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Collect all tables, adding ``councilMemberName`` to questions and
        ``questionTitle`` to responses.

        Any failure propagates; there are no partial snapshots.
        """
        rows: Dict[str, list] = {}
        for key, (repository_cls, _) in SNAPSHOT_TABLES.items():
            rows[key] = await repository_cls(self.session).list_all()

        member_names = {member.id: member.name for member in rows["councilMembers"]}
        question_titles = {question.id: question.title for question in rows["questions"]}

        data: Dict[str, List[Dict[str, Any]]] = {}
        for key, (_, record_cls) in SNAPSHOT_TABLES.items():
            documents = []
            for row in rows[key]:
                values = _column_values(row)
                if key == "questions":
                    values["council_member_name"] = member_names.get(row.council_member_id, "")
                elif key == "responses":
                    values["question_title"] = question_titles.get(row.question_id, "")
                documents.append(record_cls.model_validate(values).to_document())
            data[key] = documents

        logger.info(
            "Read snapshot: "
            + ", ".join(f"{key}={len(documents)}" for key, documents in data.items())
        )
        return data


class BulkEraser:
    """
    Deletes every row of every mutable table, children first.

    Each table is deleted inside its own savepoint; a failing table is
    logged and reported, and the remaining tables are still erased.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def erase(self) -> EraseReport:
        report = EraseReport()
        for key in ERASE_ORDER:
            repository_cls, _ = SNAPSHOT_TABLES[key]
            try:
                async with self.session.begin_nested():
                    report.deleted[key] = await repository_cls(self.session).delete_all()
            except Exception as e:
                logger.error(f"Failed to clear {key}: {e}", exc_info=True)
                report.failed.append(key)

        logger.warning(
            f"Cleared tables: {sum(report.deleted.values())} rows deleted"
            + (f", failed: {', '.join(report.failed)}" if report.failed else "")
        )
        return report


class SnapshotImporter:
    """
    Re-creates snapshot records and rebuilds their cross-table links.

    Example:
        importer = SnapshotImporter(session, current_user_id=user_id, skip_duplicates=True)
        stats = await importer.run(data)
    """

    def __init__(
        self,
        session: AsyncSession,
        current_user_id: str,
        skip_duplicates: bool = True,
    ):
        self.session = session
        self.current_user_id = current_user_id
        self.skip_duplicates = skip_duplicates

        self.council_members = CouncilMemberRepository(session)
        self.questions = QuestionRepository(session)
        self.responses = ResponseRepository(session)
        self.news = NewsRepository(session)
        self.slides = SlideshowSlideRepository(session)
        self.faq_items = FAQItemRepository(session)
        self.contact_messages = ContactMessageRepository(session)
        self.demographics = UserDemographicRepository(session)
        self.likes = LikeRepository(session)

        self.member_ids = ReferenceResolver("councilMember", self._member_id_by_name)
        self.question_ids = ReferenceResolver("question", self._question_id_by_title)

    async def _member_id_by_name(self, name: str) -> Optional[str]:
        member = await self.council_members.find_by_name(name)
        return member.id if member else None

    async def _question_id_by_title(self, title: str) -> Optional[str]:
        question = await self.questions.find_by_title(title)
        return question.id if question else None

    async def run(self, data: Dict[str, Any]) -> Dict[str, TableStats]:
        """Import every table in dependency order and return per-table stats."""
        handlers = {
            "councilMembers": self._import_council_member,
            "questions": self._import_question,
            "responses": self._import_response,
            "news": self._import_news,
            "slideshowSlides": self._import_slide,
            "faqItems": self._import_faq_item,
            "contactMessages": self._import_contact_message,
            "userDemographics": self._import_demographic,
            "likes": self._import_like,
        }
        stats = {key: TableStats() for key in SNAPSHOT_TABLES}

        for key in IMPORT_ORDER:
            _, record_cls = SNAPSHOT_TABLES[key]
            await self._import_table(key, data.get(key), record_cls, handlers[key], stats[key])
            await self.session.commit()
            logger.info(
                f"Imported {key}: {stats[key].imported} imported, {stats[key].skipped} skipped"
            )

        return stats

    async def _import_table(
        self,
        key: str,
        rows: Any,
        record_cls: Type[SnapshotRecord],
        handler,
        stats: TableStats,
    ) -> None:
        if not isinstance(rows, list):
            return

        for raw in rows:
            try:
                record = record_cls.model_validate(raw)
                async with self.session.begin_nested():
                    imported = await handler(record)
            except Exception as e:
                logger.error(f"Error importing {key} record: {e}", exc_info=True)
                imported = False

            if imported:
                stats.imported += 1
            else:
                stats.skipped += 1

    # MARK: - Per-table handlers (True = inserted, False = skipped)

    async def _import_council_member(self, record: CouncilMemberRecord) -> bool:
        if self.skip_duplicates:
            existing = await self.council_members.find_by_name(record.name)
            if existing:
                self.member_ids.record(record.id, existing.id)
                return False

        member = await self.council_members.insert(**record.to_columns())
        self.member_ids.record(record.id, member.id)
        return True

    async def _import_question(self, record: QuestionRecord) -> bool:
        member_id = await self.member_ids.resolve(
            record.council_member_id, record.council_member_name
        )
        if not member_id:
            logger.warning(f"Question '{record.title}': council member not found, skipping")
            return False

        if self.skip_duplicates:
            existing = await self.questions.find_by_title_and_member(record.title, member_id)
            if existing:
                self.question_ids.record(record.id, existing.id)
                return False

        columns = record.to_columns()
        columns["council_member_id"] = member_id
        question = await self.questions.insert(**columns)
        self.question_ids.record(record.id, question.id)
        return True

    async def _import_response(self, record: ResponseRecord) -> bool:
        question_id = await self.question_ids.resolve(record.question_id, record.question_title)
        if not question_id:
            logger.warning(
                f"Response: question '{record.question_title}' not found, skipping"
            )
            return False

        columns = record.to_columns()
        columns["question_id"] = question_id
        await self.responses.insert(**columns)
        return True

    async def _import_news(self, record: NewsRecord) -> bool:
        if self.skip_duplicates and await self.news.find_by_title(record.title):
            return False

        columns = record.to_columns()
        # User accounts are not migrated; the importer becomes the author
        columns["author_id"] = self.current_user_id
        await self.news.insert(**columns)
        return True

    async def _import_slide(self, record: SlideshowSlideRecord) -> bool:
        columns = record.to_columns()
        columns["created_by"] = self.current_user_id
        await self.slides.insert(**columns)
        return True

    async def _import_faq_item(self, record: FAQItemRecord) -> bool:
        if self.skip_duplicates and await self.faq_items.find_by_question(record.question):
            return False

        columns = record.to_columns()
        columns["created_by"] = self.current_user_id
        columns.setdefault("created_at", utcnow())
        await self.faq_items.insert(**columns)
        return True

    async def _import_contact_message(self, record: ContactMessageRecord) -> bool:
        await self.contact_messages.insert(**record.to_columns())
        return True

    async def _import_demographic(self, record: UserDemographicRecord) -> bool:
        await self.demographics.insert(**record.to_columns())
        return True

    async def _import_like(self, record: LikeRecord) -> bool:
        question_id = self.question_ids.remapped(record.question_id) or record.question_id
        if not question_id:
            return False

        # Remaps and raw snapshot ids can both be stale
        if await self.questions.get_by_id(question_id) is None:
            logger.warning(f"Like: question {question_id} does not exist, skipping")
            return False

        columns = record.to_columns()
        columns["question_id"] = question_id
        await self.likes.insert(**columns)
        return True


class DataMigrationService:
    """
    Admin entry points for export, import and clear.

    Example:
        async with db.session() as session:
            service = DataMigrationService(session)
            result = await service.import_all_data(user_id, json_text, ImportOptions())
    """

    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.session = session
        self.permissions = permissions or PermissionService(session)

    async def export_all_data(self, user_id: Optional[str]) -> Dict[str, Any]:
        """Snapshot of every mutable table, stamped with ``exportedAt``."""
        await self.permissions.require_admin(user_id)

        data = await SnapshotReader(self.session).read()
        return {"exportedAt": now_ms(), "data": data}

    async def clear_all_data(self, user_id: Optional[str]) -> EraseReport:
        """Delete every mutable table (superAdmin only)."""
        await self.permissions.require_super_admin(user_id)

        report = await BulkEraser(self.session).erase()
        await self.session.commit()
        return report

    async def import_all_data(
        self,
        user_id: Optional[str],
        json_data: str,
        options: Optional[ImportOptions] = None,
    ) -> ImportResult:
        """
        Import an exported snapshot.

        Authorization errors propagate. A malformed payload returns a
        failed result without touching the database.
        """
        admin = await self.permissions.require_admin(user_id)
        options = options or ImportOptions()

        try:
            data = parse_snapshot(json_data)
        except SnapshotFormatError as e:
            logger.warning(f"Rejected import payload: {e.message}")
            return ImportResult(success=False, message=f"インポートエラー: {e.message}")

        erase_report = None
        try:
            if options.clear_existing_data:
                erase_report = await BulkEraser(self.session).erase()
                await self.session.commit()

            importer = SnapshotImporter(
                self.session,
                current_user_id=admin.user_id,
                skip_duplicates=options.skip_duplicates,
            )
            stats = await importer.run(data)
        except Exception as e:
            logger.error(f"Import error: {e}", exc_info=True)
            await self.session.rollback()
            return ImportResult(success=False, message=f"インポートエラー: {e}")

        message = "データのインポートが完了しました"
        if erase_report and erase_report.failed:
            # Rows in these tables survived the clear
            message += f"（削除に失敗したテーブル: {', '.join(erase_report.failed)}）"
        return ImportResult(success=True, message=message, stats=stats)


def summarize_stats(stats: Dict[str, TableStats]) -> Iterable[str]:
    """Human-readable lines for tables that had any activity."""
    for table, counts in stats.items():
        if counts.imported or counts.skipped:
            yield f"{table}: {counts.imported} imported, {counts.skipped} skipped"
