import asyncio

import pytest

from council_portal.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from council_portal.services.contact_service import ContactService
from council_portal.services.faq_service import FAQService
from council_portal.services.image_service import ImageService
from council_portal.services.news_service import NewsService
from council_portal.services.sample_data_service import SAMPLE_MEMBERS, SampleDataService
from council_portal.services.slideshow_service import SlideshowService
from council_portal.storage import InMemoryStorageClient
from tests.factories import create_user


def test_drafts_are_hidden_from_citizens(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            citizen = await create_user(session, "citizen@example.jp")
            service = NewsService(session, storage=InMemoryStorageClient())
            draft = await service.create_news(editor, "下書き", "本文", "お知らせ", is_published=False)
            published = await service.create_news(editor, "公開", "本文", "行事", is_published=True)

            with pytest.raises(NotFoundError):
                await service.get_news(draft.id, citizen)
            return (
                await service.get_news(draft.id, editor),
                [item["title"] for item in await service.list_published()],
                await service.get_categories(),
                published.author_id == editor,
            )

    draft, titles, categories, stamped = asyncio.run(scenario())

    assert draft["author"] == {"name": "匿名", "email": "editor@example.jp"}
    assert titles == ["公開"]
    assert categories == ["行事"]
    assert stamped


def test_news_thumbnail_resolves_through_storage(database) -> None:
    storage = InMemoryStorageClient()

    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            service = NewsService(session, storage=storage)
            upload = await service.generate_thumbnail_upload_url(editor, "image/png")
            item = await service.create_news(
                editor, "写真付き", "本文", "行事", True, thumbnail_id=upload["storage_id"]
            )
            presented = await service.get_news(item.id)
            await service.delete_news(editor, item.id)
            return upload, presented, await ImageService(session, storage=storage).get_file(upload["storage_id"])

    upload, presented, stored = asyncio.run(scenario())

    assert "op=put" in upload["upload_url"]
    assert presented["thumbnail_url"].startswith(storage.base_url)
    assert "op=get" in presented["thumbnail_url"]
    assert stored is None


def test_faq_groups_published_items_by_category(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            service = FAQService(session)
            await service.create_item(editor, category="傍聴", question="予約は必要?", answer="不要です", order=1)
            await service.create_item(editor, category="傍聴", question="駐車場は?", answer="あります", order=0)
            await service.create_item(
                editor, category="その他", question="非公開", answer="-", is_published=False
            )
            grouped = await service.list_grouped()
            return {category: [item.question for item in items] for category, items in grouped.items()}

    assert asyncio.run(scenario()) == {"傍聴": ["駐車場は?", "予約は必要?"]}


def test_contact_messages_flow(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            citizen = await create_user(session, "citizen@example.jp")
            service = ContactService(session)

            with pytest.raises(ValidationError):
                await service.submit("   ")
            contact = await service.submit("道路の補修をお願いします", name="市民")
            with pytest.raises(PermissionDeniedError):
                await service.list_messages(citizen)
            with pytest.raises(ValidationError):
                await service.update_status(editor, contact.id, "closed")
            await service.update_status(editor, contact.id, "read")
            return (
                [message.status for message in await service.list_messages(editor)],
                await service.list_messages(editor, status="new"),
            )

    assert asyncio.run(scenario()) == (["read"], [])


def test_seed_inserts_once(database) -> None:
    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            service = SampleDataService(session)
            return await service.seed(editor), await service.seed(editor)

    first, second = asyncio.run(scenario())

    assert first["message"] == "サンプルデータを正常に作成しました"
    assert first["members"] == len(SAMPLE_MEMBERS)
    assert second == {"message": "データは既に存在します"}


def test_slides_link_uploaded_images_by_storage_url(database) -> None:
    storage = InMemoryStorageClient()

    async def scenario():
        async with database.session() as session:
            editor = await create_user(session, "editor@example.jp", role="admin")
            service = SlideshowService(session, storage=storage)
            upload = await service.generate_upload_url(editor, "image/jpeg")
            linked = await service.create_slide(
                editor, title="議会開催", image_url=f"https://portal.example/api/storage/{upload['storage_id']}", order=1
            )
            external = await service.create_slide(
                editor, title="外部画像", image_url="https://cdn.example/banner.png", order=0
            )
            await service.update_slide(editor, linked.id, title="議会開催中")
            await service.update_slide(editor, external.id, is_active=False)
            return upload, linked, await service.list_active()

    upload, linked, active = asyncio.run(scenario())

    assert linked.image_id == upload["storage_id"]
    assert [slide["title"] for slide in active] == ["議会開催中"]
    assert active[0]["image_url"].startswith(storage.base_url)
