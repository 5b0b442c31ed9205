"""
Sample data for a fresh installation.

Responsibility: Seed council members, questions, responses and news
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.repositories import (
    CouncilMemberRepository,
    NewsRepository,
    QuestionRepository,
    ResponseRepository,
)
from .permission_service import PermissionService

logger = logging.getLogger(__name__)

TERM_START = datetime(2023, 4, 1)

SAMPLE_MEMBERS = [
    {
        "name": "田中 太郎",
        "party": "市民の会",
        "position": "議長",
        "political_party": "無所属",
        "election_count": 3,
        "committee": "総務委員会",
        "address": "三原市本町1-1-1",
        "phone": "0848-64-0001",
        "email": "tanaka@example.com",
        "website": "https://tanaka-example.com",
        "bio": "市民の皆様の声を市政に反映させるため、日々活動しています。",
    },
    {
        "name": "佐藤 花子",
        "party": "みらい三原",
        "position": "副議長",
        "political_party": "無所属",
        "election_count": 2,
        "committee": "文教厚生委員会",
        "address": "三原市城町2-2-2",
        "phone": "0848-64-0002",
        "email": "sato@example.com",
        "bio": "子育て支援と教育環境の充実に力を入れています。",
    },
    {
        "name": "鈴木 一郎",
        "party": "市民の会",
        "political_party": "無所属",
        "election_count": 1,
        "committee": "産業建設委員会",
        "address": "三原市港町3-3-3",
        "phone": "0848-64-0003",
        "email": "suzuki@example.com",
        "bio": "地域経済の活性化と雇用創出に取り組んでいます。",
    },
    {
        "name": "高橋 美咲",
        "party": "みらい三原",
        "political_party": "無所属",
        "election_count": 1,
        "committee": "総務委員会",
        "address": "三原市宮浦4-4-4",
        "phone": "0848-64-0004",
        "email": "takahashi@example.com",
        "bio": "女性の社会参画と働きやすい環境づくりを推進しています。",
    },
    {
        "name": "山田 健二",
        "party": "無所属",
        "political_party": "無所属",
        "election_count": 4,
        "committee": "文教厚生委員会",
        "address": "三原市久井町5-5-5",
        "phone": "0848-64-0005",
        "email": "yamada@example.com",
        "bio": "高齢者福祉と医療体制の充実に尽力しています。",
    },
]

# (member index, fields)
SAMPLE_QUESTIONS = [
    (1, {
        "title": "子育て支援センターの拡充について",
        "content": "現在の子育て支援センターの利用状況と、今後の拡充計画についてお聞かせください。特に待機児童解消に向けた具体的な取り組みはありますか？",
        "category": "子育て・少子化",
        "session_date": datetime(2024, 3, 15),
        "session_number": "令和6年第1回定例会",
        "status": "answered",
    }),
    (2, {
        "title": "市内道路の整備計画について",
        "content": "市内の主要道路における渋滞緩和と安全対策について、今年度の整備計画をお聞かせください。",
        "category": "都市計画・建設",
        "session_date": datetime(2024, 3, 10),
        "session_number": "令和6年第1回定例会",
        "status": "pending",
    }),
    (4, {
        "title": "高齢者の医療体制について",
        "content": "高齢化が進む中で、市内の医療体制の現状と課題、今後の対策についてお聞かせください。",
        "category": "医療・保健",
        "session_date": datetime(2024, 2, 20),
        "session_number": "令和6年第1回定例会",
        "status": "answered",
    }),
    (0, {
        "title": "観光振興策について",
        "content": "三原市の観光資源を活用した地域活性化について、具体的な取り組みをお聞かせください。",
        "category": "観光・地域振興",
        "session_date": datetime(2024, 2, 15),
        "session_number": "令和6年第1回定例会",
        "status": "answered",
    }),
    (3, {
        "title": "学校教育環境の改善について",
        "content": "市内小中学校の教育環境改善について、ICT教育の推進状況と今後の計画をお聞かせください。",
        "category": "教育・文化",
        "session_date": datetime(2024, 1, 25),
        "session_number": "令和5年第4回定例会",
        "status": "pending",
    }),
]

# (question index, fields)
SAMPLE_RESPONSES = [
    (0, {
        "content": "現在、市内には3箇所の子育て支援センターがあり、月平均約500組の親子にご利用いただいています。来年度は新たに1箇所の開設を予定しており、待機児童解消に向けて保育士の確保と施設整備を進めてまいります。",
        "respondent_title": "子育て支援課長",
        "department": "健康福祉部",
        "response_date": datetime(2024, 3, 16),
    }),
    (2, {
        "content": "市内には現在、総合病院1箇所、診療所15箇所があります。高齢化率の上昇に対応するため、在宅医療の充実と医療従事者の確保に取り組んでおり、来年度は訪問看護ステーションの拡充を予定しています。",
        "respondent_title": "健康推進課長",
        "department": "健康福祉部",
        "response_date": datetime(2024, 2, 21),
    }),
    (3, {
        "content": "三原市では、歴史的な城跡や瀬戸内海の美しい景観を活用した観光振興に取り組んでいます。今年度は観光アプリの開発と、地域の特産品を活用したグルメツーリズムの推進を行っています。",
        "respondent_title": "観光課長",
        "department": "産業振興部",
        "response_date": datetime(2024, 2, 16),
    }),
]

SAMPLE_NEWS = [
    {
        "title": "令和6年第2回定例会の開催について",
        "content": "令和6年第2回定例会を6月10日から6月28日まで開催いたします。一般質問の受付は5月20日までとなっております。",
        "category": "議会情報",
        "publish_date": datetime(2024, 5, 1),
    },
    {
        "title": "市政報告会の開催について",
        "content": "市民の皆様に議会活動をご報告する市政報告会を、5月15日に市民会館で開催いたします。どなたでもご参加いただけます。",
        "category": "イベント",
        "publish_date": datetime(2024, 4, 20),
    },
    {
        "title": "議会だよりの発行について",
        "content": "議会だより第45号を発行いたしました。市内全戸に配布予定です。ホームページでもご覧いただけます。",
        "category": "広報",
        "publish_date": datetime(2024, 4, 10),
    },
]


class SampleDataService:
    def __init__(self, session: AsyncSession, permissions: Optional[PermissionService] = None):
        self.permissions = permissions or PermissionService(session)
        self.members = CouncilMemberRepository(session)
        self.questions = QuestionRepository(session)
        self.responses = ResponseRepository(session)
        self.news = NewsRepository(session)

    async def seed(self, user_id: Optional[str]) -> Dict[str, Any]:
        """Insert the sample set unless council members already exist."""
        admin = await self.permissions.require_admin(user_id)

        if await self.members.count() > 0:
            return {"message": "データは既に存在します"}

        member_ids = []
        for fields in SAMPLE_MEMBERS:
            member = await self.members.insert(term_start=TERM_START, is_active=True, **fields)
            member_ids.append(member.id)

        question_ids = []
        for member_index, fields in SAMPLE_QUESTIONS:
            question = await self.questions.insert(
                council_member_id=member_ids[member_index], **fields
            )
            question_ids.append(question.id)

        for question_index, fields in SAMPLE_RESPONSES:
            await self.responses.insert(question_id=question_ids[question_index], **fields)

        for fields in SAMPLE_NEWS:
            await self.news.insert(is_published=True, author_id=admin.user_id, **fields)

        logger.info(
            f"Seeded sample data: {len(member_ids)} members, {len(question_ids)} questions"
        )
        return {
            "message": "サンプルデータを正常に作成しました",
            "members": len(member_ids),
            "questions": len(question_ids),
            "responses": len(SAMPLE_RESPONSES),
            "news": len(SAMPLE_NEWS),
        }
